# cloudsvc/model/__init__.py
"""
In-memory document model: service definition, settings documents and the
project aggregate tying them together by role name.
"""

from .definition import (
    RUNTIME_VARIABLE,
    DefinitionSetting,
    Endpoint,
    Endpoints,
    ExecutionContext,
    Import,
    InputEndpoint,
    InternalEndpoint,
    LocalResources,
    LocalStore,
    Protocol,
    Role,
    RoleKind,
    ServiceDefinition,
    Startup,
    StartupTask,
    TaskType,
    Variable,
    WebRole,
    WorkerRole,
    role_class,
)
from .project import Project, RoleScaffold
from .settings import ConfigurationSetting, RoleSettings, ServiceSettings

__all__ = [
    "RUNTIME_VARIABLE",
    "ConfigurationSetting",
    "DefinitionSetting",
    "Endpoint",
    "Endpoints",
    "ExecutionContext",
    "Import",
    "InputEndpoint",
    "InternalEndpoint",
    "LocalResources",
    "LocalStore",
    "Project",
    "Protocol",
    "Role",
    "RoleKind",
    "RoleScaffold",
    "RoleSettings",
    "ServiceDefinition",
    "ServiceSettings",
    "Startup",
    "StartupTask",
    "TaskType",
    "Variable",
    "WebRole",
    "WorkerRole",
    "role_class",
]
