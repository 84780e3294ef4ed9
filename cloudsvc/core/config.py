# cloudsvc/core/config.py
"""
YAML config file reading and schema validation.

Layering (package defaults + project overrides) lives in cloudsvc.config.loader;
this module only turns one file into a validated model or a ConfigError.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional, Type, TypeVar, Union

import yaml
from pydantic import BaseModel, ValidationError

from cloudsvc.core.exceptions import CloudServiceError
from cloudsvc.logging.logger import get_logger
from cloudsvc.logging.tags import CONFIG

logger = get_logger(__name__)

T = TypeVar("T", bound=BaseModel)


class ConfigError(CloudServiceError):
    """A config file is missing, unreadable or doesn't match the schema."""

    def __init__(self, message: str, path: Optional[Path] = None):
        self.message = message
        self.path = path
        super().__init__(f"{message} (file: {path})" if path else message)


class ConfigNotFoundError(ConfigError):
    pass


class ConfigParseError(ConfigError):
    pass


class ConfigValidationError(ConfigError):
    pass


def load_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read a YAML mapping. An empty file reads as {}.

    Raises:
        ConfigNotFoundError: The file doesn't exist
        ConfigParseError: The file can't be read, isn't YAML, or isn't a mapping
    """
    p = Path(path)
    if not p.exists():
        raise ConfigNotFoundError("Config file not found", path=p)

    try:
        data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigParseError(f"Invalid YAML syntax: {e}", path=p) from e
    except OSError as e:
        raise ConfigParseError(f"Failed to read config: {e}", path=p) from e

    if not isinstance(data, dict):
        raise ConfigParseError("Config root must be a mapping", path=p)

    logger.debug(f"{CONFIG} Read {p}")
    return data


def validate_config(data: Dict[str, Any], schema: Type[T], path: Optional[Path] = None) -> T:
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Config validation failed: {e}", path=path) from e


__all__ = [
    "ConfigError",
    "ConfigNotFoundError",
    "ConfigParseError",
    "ConfigValidationError",
    "load_yaml",
    "validate_config",
]
