"""
cloudsvc - manage the structured configuration of multi-role cloud services.

A project is a folder holding a service definition document, one settings
document per environment and one folder per role. cloudsvc adds roles to a
project and enables features that link roles together, keeping all of those
files consistent.

Quick Start:
    >>> from cloudsvc import new_service_project, add_web_role, add_cache_worker_role
    >>> from cloudsvc import enable_memcache
    >>> root = new_service_project("/work", "AzureService")
    >>> web = add_web_role(root)               # "WebRole1"
    >>> cache = add_cache_worker_role(root)    # "CacheWorkerRole1"
    >>> enable_memcache(root, web, cache)

Public API:
    Scaffolding:
        - new_service_project, add_role, add_web_role, add_worker_role,
          add_cache_worker_role, RoleTemplate

    Enablement:
        - EnablementEngine, enable_memcache

    Documents:
        - DocumentStore, Project

    Errors:
        - CloudServiceError and subclasses (cloudsvc.core.exceptions)

Architecture:
    cloudsvc/
    ├── model/       # Definition/settings documents, project aggregate
    ├── store/       # Load/save with best-effort atomic persistence
    ├── roles/       # Role lookup
    ├── features/    # Closed feature registry + config-file merging
    ├── engine/      # Enablement protocol
    ├── scaffold/    # Project/role creation, packaged templates
    └── cli/         # typer application
"""

from cloudsvc.core.exceptions import (
    AlreadyEnabledError,
    CloudServiceError,
    DocumentMalformedError,
    DocumentNotFoundError,
    NotAFeatureProviderError,
    PersistenceError,
    RoleNotFoundError,
    UnsupportedRoleKindError,
)
from cloudsvc.engine import EnablementEngine, enable_memcache
from cloudsvc.model import Project
from cloudsvc.scaffold import (
    RoleTemplate,
    add_cache_worker_role,
    add_role,
    add_web_role,
    add_worker_role,
    new_service_project,
)
from cloudsvc.store import DocumentStore

__version__ = "0.1.0"

__all__ = [
    "AlreadyEnabledError",
    "CloudServiceError",
    "DocumentMalformedError",
    "DocumentNotFoundError",
    "DocumentStore",
    "EnablementEngine",
    "NotAFeatureProviderError",
    "PersistenceError",
    "Project",
    "RoleNotFoundError",
    "RoleTemplate",
    "UnsupportedRoleKindError",
    "add_cache_worker_role",
    "add_role",
    "add_web_role",
    "add_worker_role",
    "enable_memcache",
    "new_service_project",
]
