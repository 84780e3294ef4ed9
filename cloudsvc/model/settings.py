# cloudsvc/model/settings.py
"""
Service settings document model.

One settings document exists per deployment environment (Cloud, Local, ...).
Each holds, per role, the instance count and the configuration-setting
name -> value pairs. Roles are matched to the definition document by name
only; no object here points at a definition-side role.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import ConfigDict, Field

from cloudsvc.model.base import DocumentElement


class _Element(DocumentElement):
    model_config = ConfigDict(coerce_numbers_to_str=True)


class ConfigurationSetting(_Element):
    name: str
    value: str = ""


class RoleSettings(_Element):
    name: str
    instances: int = Field(default=1, ge=1)
    configuration_settings: List[ConfigurationSetting] = Field(
        default_factory=list, alias="configurationSettings"
    )

    def setting(self, name: str) -> Optional[ConfigurationSetting]:
        for s in self.configuration_settings:
            if s.name == name:
                return s
        return None

    def set_setting(self, name: str, value: str) -> bool:
        """Add the setting when absent. An existing value is left as is."""
        if self.setting(name) is not None:
            return False
        self.configuration_settings.append(ConfigurationSetting(name=name, value=value))
        return True


class ServiceSettings(_Element):
    """Root of one settings document."""

    service_name: str = Field(..., alias="serviceName")
    os_family: Optional[str] = Field(default=None, alias="osFamily")
    os_version: Optional[str] = Field(default=None, alias="osVersion")
    roles: List[RoleSettings] = Field(default_factory=list)

    def role(self, name: str) -> Optional[RoleSettings]:
        for r in self.roles:
            if r.name == name:
                return r
        return None

    def add_role(self, role_settings: RoleSettings) -> bool:
        if self.role(role_settings.name) is not None:
            return False
        self.roles.append(role_settings)
        return True
