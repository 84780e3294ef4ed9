# cloudsvc/model/definition.py
"""
Service definition document model.

Describes role topology: per role its imported modules, startup tasks,
endpoints, local storage and definition-side setting names (never values;
values live in the settings documents, see cloudsvc.model.settings).

On disk the keys are camelCase (aliases below). Every model allows extra
keys, so content this model doesn't know about survives a load/save cycle.

Mutators are idempotent by name: adding an entry whose name is already
present returns False and changes nothing.
"""

from __future__ import annotations

from enum import Enum
from typing import ClassVar, List, Optional

from pydantic import Field

from cloudsvc.model.base import DocumentElement as _Element

RUNTIME_VARIABLE = "RUNTIMEID"


class RoleKind(str, Enum):
    WEB = "web"
    WORKER = "worker"


class Protocol(str, Enum):
    TCP = "tcp"
    HTTP = "http"
    HTTPS = "https"
    UDP = "udp"


class ExecutionContext(str, Enum):
    ELEVATED = "elevated"
    LIMITED = "limited"


class TaskType(str, Enum):
    SIMPLE = "simple"
    BACKGROUND = "background"
    FOREGROUND = "foreground"


# =============================================================================
# Role parts
# =============================================================================


class Endpoint(_Element):
    name: str
    protocol: Protocol
    port: int = Field(..., ge=1, le=65535)


class InputEndpoint(Endpoint):
    """Internet-facing endpoint."""


class InternalEndpoint(Endpoint):
    """Role-to-role endpoint."""


class Endpoints(_Element):
    input: List[InputEndpoint] = Field(default_factory=list)
    internal: List[InternalEndpoint] = Field(default_factory=list)

    def names(self) -> List[str]:
        return [e.name for e in self.input] + [e.name for e in self.internal]


class LocalStore(_Element):
    name: str
    size_in_mb: int = Field(default=1000, alias="sizeInMB", ge=1)
    clean_on_role_recycle: bool = Field(default=True, alias="cleanOnRoleRecycle")


class LocalResources(_Element):
    local_storage: List[LocalStore] = Field(default_factory=list, alias="localStorage")


class Variable(_Element):
    name: str
    value: str = ""


class StartupTask(_Element):
    command_line: str = Field(..., alias="commandLine")
    execution_context: ExecutionContext = Field(
        default=ExecutionContext.ELEVATED, alias="executionContext"
    )
    task_type: TaskType = Field(default=TaskType.SIMPLE, alias="taskType")
    environment: List[Variable] = Field(default_factory=list)

    def variable(self, name: str) -> Optional[Variable]:
        for var in self.environment:
            if var.name == name:
                return var
        return None


class Startup(_Element):
    tasks: List[StartupTask] = Field(default_factory=list)


class Import(_Element):
    module_name: str = Field(..., alias="moduleName")


class DefinitionSetting(_Element):
    name: str


# =============================================================================
# Roles
# =============================================================================


class Role(_Element):
    """Common shape of web and worker roles."""

    kind: ClassVar[RoleKind]

    name: str
    vmsize: Optional[str] = None
    imports: List[Import] = Field(default_factory=list)
    startup: Startup = Field(default_factory=Startup)
    endpoints: Endpoints = Field(default_factory=Endpoints)
    local_resources: LocalResources = Field(default_factory=LocalResources, alias="localResources")
    configuration_settings: List[DefinitionSetting] = Field(
        default_factory=list, alias="configurationSettings"
    )

    # -- endpoints ------------------------------------------------------------

    def add_input_endpoint(self, endpoint: InputEndpoint) -> bool:
        if endpoint.name in self.endpoints.names():
            return False
        self.endpoints.input.append(endpoint)
        return True

    def add_internal_endpoint(self, endpoint: InternalEndpoint) -> bool:
        if endpoint.name in self.endpoints.names():
            return False
        self.endpoints.internal.append(endpoint)
        return True

    # -- local resources ------------------------------------------------------

    def add_local_store(self, store: LocalStore) -> bool:
        if any(s.name == store.name for s in self.local_resources.local_storage):
            return False
        self.local_resources.local_storage.append(store)
        return True

    # -- settings -------------------------------------------------------------

    def has_definition_setting(self, name: str) -> bool:
        return any(s.name == name for s in self.configuration_settings)

    def add_definition_setting(self, name: str) -> bool:
        if self.has_definition_setting(name):
            return False
        self.configuration_settings.append(DefinitionSetting(name=name))
        return True

    # -- imports --------------------------------------------------------------

    def has_import(self, module_name: str) -> bool:
        return any(i.module_name == module_name for i in self.imports)

    def add_import(self, module_name: str) -> bool:
        if self.has_import(module_name):
            return False
        self.imports.append(Import(module_name=module_name))
        return True

    # -- startup --------------------------------------------------------------

    def add_startup_task(self, task: StartupTask) -> bool:
        if any(t.command_line == task.command_line for t in self.startup.tasks):
            return False
        self.startup.tasks.append(task)
        return True

    def runtimes(self) -> List[str]:
        """Runtime ids listed in the role's RUNTIMEID startup variable."""
        var = self._runtime_variable()
        if var is None or not var.value:
            return []
        return [r.strip() for r in var.value.split(",") if r.strip()]

    def add_runtime(self, runtime_id: str) -> bool:
        """
        Add a runtime id to the role's RUNTIMEID variable.

        When no startup task carries the variable yet, it is created on the
        last startup task.
        """
        var = self._runtime_variable()
        if var is None:
            if not self.startup.tasks:
                raise ValueError(f"Role {self.name} has no startup task to host runtime {runtime_id!r}")
            var = Variable(name=RUNTIME_VARIABLE, value="")
            self.startup.tasks[-1].environment.append(var)

        runtimes = self.runtimes()
        if runtime_id in runtimes:
            return False
        var.value = ",".join(runtimes + [runtime_id])
        return True

    def _runtime_variable(self) -> Optional[Variable]:
        for task in self.startup.tasks:
            var = task.variable(RUNTIME_VARIABLE)
            if var is not None:
                return var
        return None


class WebRole(Role):
    kind: ClassVar[RoleKind] = RoleKind.WEB


class WorkerRole(Role):
    kind: ClassVar[RoleKind] = RoleKind.WORKER


# =============================================================================
# Document
# =============================================================================


class ServiceDefinition(_Element):
    """Root of the service definition document."""

    name: str
    web_roles: List[WebRole] = Field(default_factory=list, alias="webRoles")
    worker_roles: List[WorkerRole] = Field(default_factory=list, alias="workerRoles")

    def roles(self) -> List[Role]:
        """All roles, web roles first, each list in document order."""
        return [*self.web_roles, *self.worker_roles]

    def role_names(self) -> List[str]:
        return [r.name for r in self.roles()]

    def add_role(self, role: Role) -> None:
        if isinstance(role, WebRole):
            self.web_roles.append(role)
        elif isinstance(role, WorkerRole):
            self.worker_roles.append(role)
        else:
            raise TypeError(f"Unsupported role type: {type(role).__name__}")


def role_class(kind: RoleKind) -> type[Role]:
    return WebRole if kind == RoleKind.WEB else WorkerRole
