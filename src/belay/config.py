# config.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List

import click
import yaml

APP_NAME = "belay"
CONFIG_FILENAME = "config.yml"

# Installs and privileged system mutation: fine on a throwaway CI runner,
# not on a developer's machine.
DEFAULT_COMMAND_BLACKLIST = [
    "apt install",
    "cargo install",
    "chown",
    "rustup component add",
]


@dataclass
class ConfigError(Exception):
    path: Path
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


@dataclass
class Config:
    """
    User configuration.

    command_blacklist: substrings; any command containing one is never run.
    """
    command_blacklist: List[str] = field(default_factory=lambda: list(DEFAULT_COMMAND_BLACKLIST))

    def to_dict(self) -> dict:
        return {"command_blacklist": list(self.command_blacklist)}

    @classmethod
    def from_dict(cls, data: dict, path: Path) -> Config:
        blacklist = data.get("command_blacklist", DEFAULT_COMMAND_BLACKLIST)
        if not isinstance(blacklist, list) or not all(isinstance(b, str) for b in blacklist):
            raise ConfigError(path, "`command_blacklist` must be a list of strings")
        return cls(command_blacklist=list(blacklist))


def default_config_path() -> Path:
    """Per-user config location, e.g. ~/.config/belay/config.yml on Linux."""
    return Path(click.get_app_dir(APP_NAME)) / CONFIG_FILENAME


def save_config(config: Config, path: str | Path | None = None) -> Path:
    cfg_path = Path(path) if path is not None else default_config_path()
    cfg_path.parent.mkdir(parents=True, exist_ok=True)
    cfg_path.write_text(yaml.safe_dump(config.to_dict(), sort_keys=False), encoding="utf-8")
    return cfg_path


def load_config(path: str | Path | None = None) -> Config:
    """
    Read the user config; write the default one first if none exists.

    Raises:
        ConfigError: unreadable file, bad YAML or bad values
    """
    cfg_path = Path(path) if path is not None else default_config_path()

    if not cfg_path.exists():
        config = Config()
        save_config(config, cfg_path)
        return config

    try:
        data = yaml.safe_load(cfg_path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(cfg_path, f"could not read config: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(cfg_path, f"invalid YAML: {e}") from e

    if data is None:
        return Config()
    if not isinstance(data, dict):
        raise ConfigError(cfg_path, "config must be a mapping")
    return Config.from_dict(data, cfg_path)
