# cloudsvc/model/project.py
"""
Project aggregate: one definition document, the settings documents keyed by
environment, and one scaffold descriptor per role folder.

Scaffold descriptors carry staged writes (relative path -> bytes). Staged
content is what the project *will* hold once the store persists it; nothing
here touches the disk.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from cloudsvc.core.paths import ProjectPaths
from cloudsvc.model.definition import ServiceDefinition
from cloudsvc.model.settings import RoleSettings, ServiceSettings


@dataclass
class RoleScaffold:
    """On-disk folder of one role, plus writes pending for it."""

    role_name: str
    path: Path
    staged: Dict[str, bytes] = field(default_factory=dict)

    def stage(self, relative: str, content: bytes | str) -> None:
        if isinstance(content, str):
            content = content.encode("utf-8")
        self.staged[Path(relative).as_posix()] = content

    def staged_text(self, relative: str) -> Optional[str]:
        data = self.staged.get(Path(relative).as_posix())
        return None if data is None else data.decode("utf-8")

    def target(self, relative: str) -> Path:
        return self.path / relative


@dataclass
class Project:
    paths: ProjectPaths
    definition: ServiceDefinition
    settings: Dict[str, ServiceSettings]
    scaffolds: Dict[str, RoleScaffold] = field(default_factory=dict)

    @property
    def root(self) -> Path:
        return self.paths.root

    @property
    def name(self) -> str:
        return self.definition.name

    def scaffold(self, role_name: str) -> RoleScaffold:
        """Scaffold descriptor for a role, created on first use."""
        if role_name not in self.scaffolds:
            self.scaffolds[role_name] = RoleScaffold(role_name, self.paths.role_dir(role_name))
        return self.scaffolds[role_name]

    def role_settings(self, role_name: str) -> List[RoleSettings]:
        """The role's entry in every settings document, in environment order."""
        found = []
        for doc in self.settings.values():
            entry = doc.role(role_name)
            if entry is not None:
                found.append(entry)
        return found

    def has_staged_writes(self) -> bool:
        return any(s.staged for s in self.scaffolds.values())
