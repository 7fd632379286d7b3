"""
Configuration management for oppack.

Loads $OPPACK_HOME/config.yaml (default ~/.config/oppack/config.yaml).
"""

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import yaml

from oppack.errors import ConfigError

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
LOG_FORMATS = ("pretty", "structured")


def get_oppack_home() -> Path:
    """Directory holding oppack's config.yaml ($OPPACK_HOME or ~/.config/oppack)."""
    home = os.environ.get("OPPACK_HOME")
    if home:
        return Path(home)
    return Path("~/.config/oppack").expanduser()


@dataclass(frozen=True)
class OppackConfig:
    """
    oppack settings.

    Attributes:
        namespace: Namespace set on compiled resources
        log_level: DEBUG, INFO, WARNING or ERROR
        log_format: "pretty" (rich console) or "structured" (JSON lines)
        log_file: Optional file to also write logs to
        strict_task_kinds: Reject task kinds that have no validator
    """
    namespace: str = "default"
    log_level: str = "INFO"
    log_format: str = "pretty"
    log_file: Optional[str] = None
    strict_task_kinds: bool = False

    def __post_init__(self):
        for name in ("namespace", "log_level", "log_format"):
            if not isinstance(getattr(self, name), str):
                raise ConfigError(f"{name} must be a string, got {getattr(self, name)!r}")
        if self.log_file is not None and not isinstance(self.log_file, str):
            raise ConfigError(f"log_file must be a string, got {self.log_file!r}")
        if not self.namespace:
            raise ConfigError("namespace must not be empty")
        if self.log_level.upper() not in LOG_LEVELS:
            raise ConfigError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {self.log_level!r}")
        if self.log_format not in LOG_FORMATS:
            raise ConfigError(f"log_format must be one of {', '.join(LOG_FORMATS)}, got {self.log_format!r}")
        if not isinstance(self.strict_task_kinds, bool):
            raise ConfigError("strict_task_kinds must be a boolean")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "OppackConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")
        return cls(**data)


def load_config(config_path: Optional[Path] = None, required: bool = True) -> OppackConfig:
    """
    Load oppack configuration.

    Args:
        config_path: Path to config file. Defaults to $OPPACK_HOME/config.yaml
        required: Raise when the file is missing instead of using defaults

    Returns:
        OppackConfig instance

    Raises:
        FileNotFoundError: If required and the file does not exist
        ConfigError: If the file is not valid
    """
    if config_path is None:
        config_path = get_oppack_home() / "config.yaml"

    if not config_path.exists():
        if required:
            raise FileNotFoundError(f"oppack config.yaml not found at {config_path}")
        return OppackConfig()

    try:
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax: {e}")

    if not isinstance(data, dict):
        raise ConfigError(f"Configuration file must be a mapping: {config_path}")

    return OppackConfig.from_dict(data)
