# tests/test_document_model.py
"""
Tests for the definition and settings document models.
"""

from __future__ import annotations

import pytest

from cloudsvc.model import (
    InputEndpoint,
    InternalEndpoint,
    LocalStore,
    Protocol,
    RoleKind,
    RoleSettings,
    ServiceDefinition,
    ServiceSettings,
    StartupTask,
    Variable,
    WebRole,
    WorkerRole,
    role_class,
)

pytestmark = pytest.mark.tier1


def _web_role(**kwargs) -> WebRole:
    task = StartupTask(
        command_line="setup_web.cmd > log.txt",
        environment=[Variable(name="RUNTIMEID", value="node,iisnode")],
    )
    return WebRole.model_validate({"name": "WebRole1", "startup": {"tasks": [task]}, **kwargs})


class TestRoleMutators:
    """Adding entries is idempotent by name."""

    def test_internal_endpoint_added_once(self):
        """Second add with the same name is a no-op."""
        role = _web_role()
        endpoint = InternalEndpoint(name="memcache_default", protocol=Protocol.TCP, port=11211)

        assert role.add_internal_endpoint(endpoint) is True
        assert role.add_internal_endpoint(endpoint) is False
        assert len(role.endpoints.internal) == 1

    def test_endpoint_names_shared_across_input_and_internal(self):
        """An internal endpoint can't reuse an input endpoint's name."""
        role = _web_role()
        role.add_input_endpoint(InputEndpoint(name="Endpoint1", protocol=Protocol.HTTP, port=80))

        added = role.add_internal_endpoint(
            InternalEndpoint(name="Endpoint1", protocol=Protocol.TCP, port=11211)
        )

        assert added is False
        assert role.endpoints.internal == []

    def test_local_store_added_once(self):
        role = _web_role()
        store = LocalStore(name="DiagnosticStore", size_in_mb=20000, clean_on_role_recycle=False)

        assert role.add_local_store(store) is True
        assert role.add_local_store(store) is False
        assert role.local_resources.local_storage[0].size_in_mb == 20000

    def test_definition_setting_added_once(self):
        role = _web_role()

        assert role.add_definition_setting("X") is True
        assert role.add_definition_setting("X") is False
        assert role.has_definition_setting("X")

    def test_startup_task_matched_by_command_line(self):
        role = _web_role()

        assert role.add_startup_task(StartupTask(command_line="setup_web.cmd > log.txt")) is False
        assert role.add_startup_task(StartupTask(command_line="setup_cache.cmd > cache_log.txt")) is True
        assert [t.command_line for t in role.startup.tasks] == [
            "setup_web.cmd > log.txt",
            "setup_cache.cmd > cache_log.txt",
        ]

    def test_import(self):
        role = WorkerRole(name="CacheWorkerRole1")

        assert not role.has_import("Caching")
        assert role.add_import("Caching") is True
        assert role.add_import("Caching") is False
        assert role.has_import("Caching")


class TestRuntimes:
    """RUNTIMEID startup variable handling."""

    def test_reads_runtime_list(self):
        assert _web_role().runtimes() == ["node", "iisnode"]

    def test_appends_runtime(self):
        role = _web_role()

        assert role.add_runtime("cache") is True
        assert role.runtimes() == ["node", "iisnode", "cache"]

    def test_runtime_added_once(self):
        role = _web_role()
        role.add_runtime("cache")

        assert role.add_runtime("cache") is False
        assert role.runtimes() == ["node", "iisnode", "cache"]

    def test_creates_variable_on_last_task(self):
        """Without a RUNTIMEID variable, one is created on the last task."""
        role = WebRole(
            name="WebRole1",
            startup={"tasks": [{"commandLine": "a.cmd"}, {"commandLine": "b.cmd"}]},
        )

        role.add_runtime("cache")

        assert role.startup.tasks[0].environment == []
        assert role.startup.tasks[1].variable("RUNTIMEID").value == "cache"

    def test_no_startup_task(self):
        role = WebRole(name="WebRole1")

        with pytest.raises(ValueError, match="no startup task"):
            role.add_runtime("cache")


class TestServiceDefinition:
    def test_roles_web_first(self):
        definition = ServiceDefinition(
            name="AzureService",
            worker_roles=[WorkerRole(name="W")],
            web_roles=[WebRole(name="A"), WebRole(name="B")],
        )

        assert definition.role_names() == ["A", "B", "W"]
        assert [r.kind for r in definition.roles()] == [RoleKind.WEB, RoleKind.WEB, RoleKind.WORKER]

    def test_add_role_by_kind(self):
        definition = ServiceDefinition(name="AzureService")

        definition.add_role(role_class(RoleKind.WORKER)(name="W"))
        definition.add_role(role_class(RoleKind.WEB)(name="A"))

        assert [r.name for r in definition.web_roles] == ["A"]
        assert [r.name for r in definition.worker_roles] == ["W"]

    def test_parses_camel_case(self):
        definition = ServiceDefinition.model_validate(
            {
                "name": "AzureService",
                "webRoles": [
                    {
                        "name": "WebRole1",
                        "localResources": {
                            "localStorage": [{"name": "S", "sizeInMB": 5, "cleanOnRoleRecycle": False}]
                        },
                        "configurationSettings": [{"name": "X"}],
                    }
                ],
            }
        )

        role = definition.web_roles[0]
        assert role.local_resources.local_storage[0].size_in_mb == 5
        assert role.local_resources.local_storage[0].clean_on_role_recycle is False
        assert role.has_definition_setting("X")

    def test_unknown_keys_kept(self):
        """Keys the model doesn't declare survive a dump."""
        data = {
            "name": "AzureService",
            "upgradeDomainCount": 5,
            "notes": None,
            "webRoles": [{"name": "WebRole1", "sites": [{"name": "Web"}]}],
        }

        dumped = ServiceDefinition.model_validate(data).model_dump(by_alias=True)

        assert dumped["upgradeDomainCount"] == 5
        assert "notes" in dumped and dumped["notes"] is None
        assert dumped["webRoles"][0]["sites"] == [{"name": "Web"}]
        assert "vmsize" not in dumped["webRoles"][0]

    def test_rejects_bad_port(self):
        with pytest.raises(ValueError):
            InputEndpoint(name="Endpoint1", protocol=Protocol.HTTP, port=0)


class TestSettings:
    def test_set_setting_adds_when_absent(self):
        entry = RoleSettings(name="WebRole1")

        assert entry.set_setting("Level", "1") is True
        assert entry.setting("Level").value == "1"

    def test_set_setting_keeps_existing_value(self):
        entry = RoleSettings(name="WebRole1", configuration_settings=[{"name": "Level", "value": "3"}])

        assert entry.set_setting("Level", "1") is False
        assert entry.setting("Level").value == "3"

    def test_numeric_values_read_as_strings(self):
        settings = ServiceSettings.model_validate(
            {
                "serviceName": "AzureService",
                "osFamily": 2,
                "roles": [{"name": "W", "configurationSettings": [{"name": "Level", "value": 1}]}],
            }
        )

        assert settings.os_family == "2"
        assert settings.role("W").setting("Level").value == "1"

    def test_instances_must_be_positive(self):
        with pytest.raises(ValueError):
            RoleSettings(name="WebRole1", instances=0)

    def test_add_role_once(self):
        settings = ServiceSettings(service_name="AzureService")

        assert settings.add_role(RoleSettings(name="W")) is True
        assert settings.add_role(RoleSettings(name="W", instances=3)) is False
        assert settings.role("W").instances == 1
        assert settings.role("missing") is None
