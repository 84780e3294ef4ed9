# cloudsvc/config/loader.py
"""
Layered configuration loading for cloudsvc.

Merge strategy:
    1. Package defaults (cloudsvc/config/defaults/cloudsvc.yaml) - always loaded
    2. Project config (<project>/.cloudsvc/config.yaml) - overrides defaults

The result is validated against CloudSvcConfig, so every value is guaranteed
to exist. Callers never need fallback logic.

Usage:
    from cloudsvc.config import load_config

    config = load_config(project_root)
    config.documents.definition  # always exists
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from cloudsvc.config.schema import CloudSvcConfig
from cloudsvc.core.config import load_yaml, validate_config
from cloudsvc.core.paths import ProjectPaths
from cloudsvc.logging.logger import get_logger
from cloudsvc.logging.tags import CONFIG

logger = get_logger(__name__)

DEFAULTS_PATH = Path(__file__).parent / "defaults" / "cloudsvc.yaml"


def deep_merge(base: dict, override: dict) -> dict:
    """
    Overlay a project override on the defaults without mutating either.

    Mappings merge key by key, so an override that names one settings
    environment keeps the others. Any other value, lists included, replaces
    the default outright.
    """
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            value = deep_merge(current, value)
        merged[key] = value
    return merged


def load_defaults() -> dict[str, Any]:
    """Load package defaults."""
    return load_yaml(DEFAULTS_PATH)


def load_project_config(project_root: Optional[Path | str]) -> dict[str, Any] | None:
    """
    Load the project override, or None when the project has none.

    A present but broken override is an error, not something to skip.
    """
    if project_root is None:
        return None

    user_path = ProjectPaths.user_config(project_root)
    if not user_path.exists():
        logger.debug(f"{CONFIG} No project config at {user_path}")
        return None

    return load_yaml(user_path)


def load_config(project_root: Optional[Path | str] = None) -> CloudSvcConfig:
    """
    Load the complete configuration for a project.

    Args:
        project_root: Project folder whose override should be applied.
            None loads package defaults only.

    Raises:
        ConfigParseError: If a config file is not valid YAML
        ConfigValidationError: If the merged config doesn't match the schema
    """
    defaults = load_defaults()
    override = load_project_config(project_root)

    if override is None:
        return validate_config(defaults, CloudSvcConfig, DEFAULTS_PATH)

    merged = deep_merge(defaults, override)
    logger.debug(f"{CONFIG} Merged config: defaults + project overrides")
    return validate_config(merged, CloudSvcConfig, ProjectPaths.user_config(project_root))


__all__ = [
    "DEFAULTS_PATH",
    "deep_merge",
    "load_config",
    "load_defaults",
    "load_project_config",
]
