# cloudsvc/scaffold/__init__.py
"""
Project and role scaffolding: the collaborators that create what the
enablement engine works on.
"""

from .project import new_service_project
from .roles import (
    RoleTemplate,
    add_cache_worker_role,
    add_role,
    add_web_role,
    add_worker_role,
)

__all__ = [
    "RoleTemplate",
    "add_cache_worker_role",
    "add_role",
    "add_web_role",
    "add_worker_role",
    "new_service_project",
]
