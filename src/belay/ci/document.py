# ci/document.py
# Shared YAML helpers for the provider parsers.
from __future__ import annotations

from typing import Any, Dict, List, Optional

import yaml

from .errors import MissingDocument, ScanError, invalid_field, missing_field


def load_document(text: str, source: str | None = None) -> Dict[Any, Any]:
    """
    Load YAML text into a mapping.

    Raises:
        ScanError: YAML syntax error
        MissingDocument: empty input / null document
        InvalidField: the document root is not a mapping
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ScanError(message=str(e), source=source) from e

    if data is None:
        raise MissingDocument(message="no YAML document found", source=source)
    if not isinstance(data, dict):
        raise invalid_field("<root>", "a mapping", data, source=source)
    return data


def require(mapping: Dict[Any, Any], key: str, path: str, source: str | None) -> Any:
    if key not in mapping or mapping[key] is None:
        raise missing_field(path, source=source)
    return mapping[key]


def optional_str(value: Any, path: str, source: str | None) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise invalid_field(path, "a string", value, source=source)
    return value


def str_list(value: Any, path: str, source: str | None) -> List[str]:
    if not isinstance(value, list):
        raise invalid_field(path, "a list of strings", value, source=source)
    for i, item in enumerate(value):
        if not isinstance(item, str):
            raise invalid_field(f"{path}[{i}]", "a string", item, source=source)
    return list(value)
