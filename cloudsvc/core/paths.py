# cloudsvc/core/paths.py
"""
Project path management.

ALL components that need a project file path go through ProjectPaths.
No hardcoded document names anywhere else in the codebase.

Usage:
    from cloudsvc.core.paths import ProjectPaths

    paths = ProjectPaths.from_config(root, config)
    paths.definition()          # <root>/ServiceDefinition.yaml
    paths.settings("Cloud")     # <root>/ServiceConfiguration.Cloud.yaml
    paths.role_dir("WebRole1")  # <root>/WebRole1
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Dict, List

if TYPE_CHECKING:
    from cloudsvc.config.schema import CloudSvcConfig

CONFIG_DIR = ".cloudsvc"
CONFIG_FILE = "config.yaml"


@dataclass(frozen=True)
class ProjectPaths:
    """Resolved locations of one project's documents and role folders."""

    root: Path
    definition_name: str
    settings_names: Dict[str, str] = field(default_factory=dict)
    web_config_name: str = "Web.cloud.config"

    @classmethod
    def from_config(cls, root: Path | str, config: "CloudSvcConfig") -> "ProjectPaths":
        return cls(
            root=Path(root),
            definition_name=config.documents.definition,
            settings_names=dict(config.documents.settings),
            web_config_name=config.scaffolding.web_config,
        )

    @staticmethod
    def user_config(root: Path | str) -> Path:
        """Project-level config override: <root>/.cloudsvc/config.yaml"""
        return Path(root) / CONFIG_DIR / CONFIG_FILE

    def definition(self) -> Path:
        return self.root / self.definition_name

    def settings(self, environment: str) -> Path:
        return self.root / self.settings_names[environment]

    def environments(self) -> List[str]:
        """Settings environments in configured order."""
        return list(self.settings_names)

    def role_dir(self, role_name: str) -> Path:
        return self.root / role_name
