# cloudsvc/features/directives.py
"""
Mutation directives a feature applies to its consumer role.

Each directive is declarative data only. The enablement engine interprets
them in order; nothing here touches a document.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from cloudsvc.model import ExecutionContext, Protocol, TaskType


@dataclass(frozen=True)
class AddStartupTask:
    command_line: str
    execution_context: ExecutionContext = ExecutionContext.ELEVATED
    task_type: TaskType = TaskType.SIMPLE


@dataclass(frozen=True)
class AddRuntime:
    runtime_id: str


@dataclass(frozen=True)
class CopyScaffolding:
    """Copy a packaged template folder into the consumer's role folder."""

    template: str


@dataclass(frozen=True)
class AddInternalEndpoint:
    name: str
    protocol: Protocol
    port: int


@dataclass(frozen=True)
class AddLocalStore:
    name: str
    size_in_mb: int
    clean_on_role_recycle: bool


@dataclass(frozen=True)
class AddDefinitionSetting:
    name: str


@dataclass(frozen=True)
class AddSettingValue:
    """Add name=value to the consumer's entry in every settings document."""

    name: str
    value: str


@dataclass(frozen=True)
class InjectConfigSections:
    """
    Merge XML sections into a role-local config file.

    Fragments may reference the provider role as {provider}. A file of None
    targets the configured web config file.
    """

    sections: Tuple[str, ...]
    file: Optional[str] = None


Directive = Union[
    AddStartupTask,
    AddRuntime,
    CopyScaffolding,
    AddInternalEndpoint,
    AddLocalStore,
    AddDefinitionSetting,
    AddSettingValue,
    InjectConfigSections,
]
