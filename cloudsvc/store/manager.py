# cloudsvc/store/manager.py
"""
Document store for cloud service projects.

Reads and writes the service definition, the settings documents and staged
role scaffold files.

Key responsibilities:
- Load documents from disk into the model (cloudsvc.model)
- Enforce load-time invariants (unique role names, name-correlated settings)
- Persist everything in one best-effort atomic pass

Key non-responsibilities:
- NO role lookup policy (that's the locator's job)
- NO feature logic

Persistence protocol:
    1. Render every document and staged file to bytes in memory
    2. Write each one to a uniquely named sibling temporary file
    3. Only when all temporaries exist, rename them into place in fixed order
       (definition, settings in configured order, scaffold files)

A failure in step 2 removes the temporaries and leaves every target
untouched. A failure in step 3 is reported as-is; files renamed before it
are not rolled back.
"""

from __future__ import annotations

import uuid
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple, Type, TypeVar

import yaml
from pydantic import BaseModel, ValidationError

from cloudsvc.config import CloudSvcConfig, load_config
from cloudsvc.core.config import ConfigError
from cloudsvc.core.exceptions import (
    DocumentMalformedError,
    DocumentNotFoundError,
    PersistenceError,
)
from cloudsvc.core.paths import ProjectPaths
from cloudsvc.logging.logger import get_logger
from cloudsvc.logging.tags import STORE
from cloudsvc.model import Project, RoleScaffold, ServiceDefinition, ServiceSettings

logger = get_logger(__name__)

M = TypeVar("M", bound=BaseModel)

TEMP_SUFFIX = ".tmp"


class _DocumentDumper(yaml.SafeDumper):
    """SafeDumper that writes enum members as their values."""


_DocumentDumper.add_multi_representer(Enum, lambda dumper, value: dumper.represent_data(value.value))


def _write_temp(target: Path, data: bytes) -> Path:
    """
    Write data to a new, uniquely named sibling of target.

    The name never collides with an existing file, so nothing already in the
    folder is overwritten or later removed.
    """
    target.parent.mkdir(parents=True, exist_ok=True)
    temp = target.with_name(f".{target.name}.{uuid.uuid4().hex[:12]}{TEMP_SUFFIX}")
    try:
        with temp.open("xb") as f:
            f.write(data)
    except OSError:
        temp.unlink(missing_ok=True)
        raise
    return temp


def dump_document(model: BaseModel) -> bytes:
    """Serialize a document model to YAML, keeping field order and unknown values as loaded."""
    data = model.model_dump(mode="python", by_alias=True)
    text = yaml.dump(
        data,
        Dumper=_DocumentDumper,
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
    )
    return text.encode("utf-8")


class DocumentStore:
    """
    Loads and saves cloud service projects.

    Usage:
        store = DocumentStore()
        project = store.load("/path/to/AzureService")

        project.definition.web_roles[0].add_definition_setting("X")
        store.save(project)

    Args:
        config: Fixed configuration. If None, each project's configuration is
            loaded from package defaults plus the project's own override.
    """

    def __init__(self, config: Optional[CloudSvcConfig] = None) -> None:
        self._config = config

    # -------------------------------------------------------------------------
    # Paths
    # -------------------------------------------------------------------------

    def paths_for(self, root: Path | str) -> ProjectPaths:
        """
        Raises:
            DocumentMalformedError: The project's config override is unreadable
                or invalid
        """
        if self._config is not None:
            return ProjectPaths.from_config(root, self._config)
        try:
            config = load_config(root)
        except ConfigError as e:
            raise DocumentMalformedError(f"Invalid project configuration: {e.message}", path=e.path) from e
        return ProjectPaths.from_config(root, config)

    # -------------------------------------------------------------------------
    # Load
    # -------------------------------------------------------------------------

    def load(self, root: Path | str) -> Project:
        """
        Load a project from disk.

        Raises:
            DocumentNotFoundError: A definition or settings document is missing
            DocumentMalformedError: A document can't be parsed, doesn't match
                its schema, or breaks a cross-document invariant
        """
        paths = self.paths_for(root)

        definition = self._load_document(paths.definition(), ServiceDefinition)
        settings = {
            env: self._load_document(paths.settings(env), ServiceSettings)
            for env in paths.environments()
        }

        self._check_unique_roles(definition, paths.definition())
        for env, doc in settings.items():
            self._check_correlated(definition, doc, paths.settings(env))

        project = Project(paths=paths, definition=definition, settings=settings)
        for name in definition.role_names():
            project.scaffold(name)

        logger.debug(
            f"{STORE} Loaded project {definition.name!r} from {paths.root} "
            f"({len(project.scaffolds)} roles, {len(settings)} settings documents)"
        )
        return project

    def _load_document(self, path: Path, model: Type[M]) -> M:
        if not path.is_file():
            raise DocumentNotFoundError(path)

        try:
            with path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise DocumentMalformedError(f"Invalid YAML syntax: {e}", path=path) from e
        except OSError as e:
            raise DocumentMalformedError(f"Failed to read document: {e}", path=path) from e

        if not isinstance(data, dict):
            raise DocumentMalformedError("Document root must be a mapping", path=path)

        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise DocumentMalformedError(f"Document validation failed: {e}", path=path) from e

    @staticmethod
    def _check_unique_roles(definition: ServiceDefinition, path: Path) -> None:
        seen = set()
        for name in definition.role_names():
            if name in seen:
                raise DocumentMalformedError(f"Duplicate role name {name!r}", path=path)
            seen.add(name)

    @staticmethod
    def _check_correlated(definition: ServiceDefinition, settings: ServiceSettings, path: Path) -> None:
        declared = definition.role_names()
        configured = [r.name for r in settings.roles]

        if len(set(configured)) != len(configured):
            raise DocumentMalformedError("Duplicate role entry in settings", path=path)

        missing = [name for name in declared if name not in configured]
        if missing:
            raise DocumentMalformedError(f"No settings for roles: {', '.join(missing)}", path=path)

        orphaned = [name for name in configured if name not in declared]
        if orphaned:
            raise DocumentMalformedError(
                f"Settings for undeclared roles: {', '.join(orphaned)}", path=path
            )

    # -------------------------------------------------------------------------
    # Scaffold files
    # -------------------------------------------------------------------------

    def read_scaffold_text(self, scaffold: RoleScaffold, relative: str) -> Optional[str]:
        """Current content of a role file: staged content first, then disk."""
        staged = scaffold.staged_text(relative)
        if staged is not None:
            return staged

        target = scaffold.target(relative)
        if not target.is_file():
            return None
        return target.read_text(encoding="utf-8")

    def has_scaffold_file(self, scaffold: RoleScaffold, relative: str) -> bool:
        return Path(relative).as_posix() in scaffold.staged or scaffold.target(relative).is_file()

    # -------------------------------------------------------------------------
    # Save
    # -------------------------------------------------------------------------

    def save(self, project: Project) -> None:
        """
        Persist the project's documents and staged scaffold files.

        Raises:
            PersistenceError: One or more files could not be written
        """
        writes = self._render(project)

        written: List[Tuple[Path, Path]] = []
        try:
            for target, data in writes:
                written.append((_write_temp(target, data), target))
        except OSError as e:
            self._discard(temp for temp, _ in written)
            raise PersistenceError(target, e) from e

        for index, (temp, target) in enumerate(written):
            try:
                temp.replace(target)
            except OSError as e:
                self._discard(t for t, _ in written[index:])
                raise PersistenceError(target, e) from e

        for scaffold in project.scaffolds.values():
            scaffold.staged.clear()

        logger.debug(f"{STORE} Saved {len(writes)} file(s) under {project.root}")

    def _render(self, project: Project) -> List[Tuple[Path, bytes]]:
        paths = project.paths
        writes: List[Tuple[Path, bytes]] = [(paths.definition(), dump_document(project.definition))]

        for env in paths.environments():
            writes.append((paths.settings(env), dump_document(project.settings[env])))

        for scaffold in project.scaffolds.values():
            for relative, data in scaffold.staged.items():
                writes.append((scaffold.target(relative), data))

        return writes

    @staticmethod
    def _discard(temps) -> None:
        for temp in temps:
            try:
                temp.unlink(missing_ok=True)
            except OSError as e:
                logger.warning(f"{STORE} Could not remove temporary file {temp}: {e}")

