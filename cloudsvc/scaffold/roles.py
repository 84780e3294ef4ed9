# cloudsvc/scaffold/roles.py
"""
Add roles to a project.

A role is added from a packaged skeleton (cloudsvc/scaffold/skeletons/) that
supplies its definition entry, its settings entry and the template folder
copied as its scaffold. The definition, every settings document and the
role folder are written together by the document store.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Set

from cloudsvc.core.config import load_yaml
from cloudsvc.core.exceptions import RoleAlreadyExistsError
from cloudsvc.logging.logger import get_logger
from cloudsvc.logging.tags import SCAFFOLD
from cloudsvc.model import Project, RoleKind, RoleSettings, role_class
from cloudsvc.roles.locator import next_role_name, role_exists
from cloudsvc.scaffold.templates import stage_template
from cloudsvc.store import DocumentStore

logger = get_logger(__name__)

SKELETONS_DIR = Path(__file__).parent / "skeletons"

FIRST_HTTP_PORT = 80


class RoleTemplate(str, Enum):
    WEB = "web_role"
    WORKER = "worker_role"
    CACHE_WORKER = "cache_worker_role"

    @property
    def kind(self) -> RoleKind:
        return RoleKind.WEB if self is RoleTemplate.WEB else RoleKind.WORKER


def load_skeleton(template: RoleTemplate) -> Dict[str, Any]:
    return load_yaml(SKELETONS_DIR / f"{template.value}.yaml")


def _used_ports(project: Project) -> Set[int]:
    return {e.port for role in project.definition.roles() for e in role.endpoints.input}


def _next_free_port(used: Set[int]) -> int:
    port = FIRST_HTTP_PORT
    while port in used:
        port += 1
    return port


def add_role(
    project_path: Path | str,
    template: RoleTemplate | str,
    name: Optional[str] = None,
    instances: int = 1,
    store: Optional[DocumentStore] = None,
) -> str:
    """
    Add a role to a project.

    Args:
        project_path: Project root
        template: Which kind of role to add
        name: Role name. Defaults to the skeleton prefix plus the first free
            number (WebRole1, WebRole2, ...)
        instances: Instance count written to every settings document

    Returns:
        The role name

    Raises:
        ValueError: instances < 1
        RoleAlreadyExistsError: A role with that name exists
        DocumentNotFoundError, DocumentMalformedError: Project can't be loaded
        PersistenceError: Project files couldn't be written
    """
    template = RoleTemplate(template)
    if instances < 1:
        raise ValueError(f"Instance count must be at least 1, got {instances}")

    store = store or DocumentStore()
    project = store.load(project_path)
    skeleton = load_skeleton(template)

    name = name or next_role_name(project, skeleton["prefix"])
    if role_exists(project, name):
        raise RoleAlreadyExistsError(name)

    role = role_class(template.kind).model_validate({**skeleton.get("definition", {}), "name": name})
    used = _used_ports(project)
    for endpoint in role.endpoints.input:
        endpoint.port = _next_free_port(used)
        used.add(endpoint.port)
    project.definition.add_role(role)

    for settings in project.settings.values():
        settings.add_role(
            RoleSettings.model_validate(
                {**skeleton.get("settings", {}), "name": name, "instances": instances}
            )
        )

    staged = stage_template(store, project.scaffold(name), skeleton["template"])
    store.save(project)

    logger.info(
        f"{SCAFFOLD} Added {template.kind.value} role {name!r} "
        f"({instances} instance(s), {len(staged)} scaffold file(s))"
    )
    return name


def add_web_role(project_path: Path | str, name: Optional[str] = None, instances: int = 1, **kwargs) -> str:
    return add_role(project_path, RoleTemplate.WEB, name, instances, **kwargs)


def add_worker_role(project_path: Path | str, name: Optional[str] = None, instances: int = 1, **kwargs) -> str:
    return add_role(project_path, RoleTemplate.WORKER, name, instances, **kwargs)


def add_cache_worker_role(
    project_path: Path | str, name: Optional[str] = None, instances: int = 1, **kwargs
) -> str:
    return add_role(project_path, RoleTemplate.CACHE_WORKER, name, instances, **kwargs)
