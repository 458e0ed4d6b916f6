# ci/errors.py
from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ParseError(Exception):
    """
    A CI configuration file could not be turned into a config tree.

    `source` is the file the text came from, when known, so the CLI can
    say which workflow is broken.
    """
    message: str
    source: str | None = None

    kind = "ParseError"

    def __str__(self) -> str:
        prefix = f"{self.source}: " if self.source else ""
        return f"{prefix}{self.kind}: {self.message}"


class ScanError(ParseError):
    """Malformed YAML. `message` is the YAML parser's diagnostic."""
    kind = "ScanError"


class MissingDocument(ParseError):
    """The text holds no YAML document at all."""
    kind = "MissingDocument"


@dataclass
class MissingField(ParseError):
    field: str = ""

    kind = "MissingField"


@dataclass
class InvalidField(ParseError):
    field: str = ""
    expected: str = ""

    kind = "InvalidField"


def missing_field(field: str, source: str | None = None) -> MissingField:
    return MissingField(message=f"missing field `{field}`", source=source, field=field)


def invalid_field(field: str, expected: str, got: object, source: str | None = None) -> InvalidField:
    return InvalidField(
        message=f"`{field}` must be {expected}, got {type(got).__name__}",
        source=source,
        field=field,
        expected=expected,
    )
