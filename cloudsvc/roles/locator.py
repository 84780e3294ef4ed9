# cloudsvc/roles/locator.py
"""
Role lookup within a loaded project.

Lookup is a linear scan over web roles then worker roles, matching the exact
(case-sensitive) name. Duplicate names never reach this module: the document
store rejects them at load time.
"""

from __future__ import annotations

from typing import Optional

from cloudsvc.core.exceptions import RoleNotFoundError, WrongRoleKindError
from cloudsvc.logging.logger import get_logger
from cloudsvc.logging.tags import LOCATOR
from cloudsvc.model import Project, Role, RoleKind

logger = get_logger(__name__)


def _scan(project: Project, name: str) -> Optional[Role]:
    for role in project.definition.roles():
        if role.name == name:
            return role
    return None


def find_role(project: Project, name: str) -> Role:
    """
    Find a role by name.

    Raises:
        RoleNotFoundError: No role with that name exists
    """
    role = _scan(project, name)
    if role is None:
        logger.debug(f"{LOCATOR} Role {name!r} not found in {project.name!r}")
        raise RoleNotFoundError(name)
    return role


def role_exists(project: Project, name: str) -> bool:
    return _scan(project, name) is not None


def expect_kind(role: Role, kind: RoleKind) -> Role:
    """
    Assert a role is of the given kind.

    Raises:
        WrongRoleKindError: The role is of the other kind
    """
    if role.kind != kind:
        raise WrongRoleKindError(role.name, expected=kind.value, actual=role.kind.value)
    return role


def next_role_name(project: Project, prefix: str) -> str:
    """First free name of the form <prefix><n>, starting at 1."""
    index = 1
    while role_exists(project, f"{prefix}{index}"):
        index += 1
    return f"{prefix}{index}"
