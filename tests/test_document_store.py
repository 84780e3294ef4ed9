# tests/test_document_store.py
"""
Tests for loading and saving projects through DocumentStore.
"""

from __future__ import annotations

import datetime
import shutil
from pathlib import Path

import pytest
import yaml

import cloudsvc.store.manager as manager
from cloudsvc.core.exceptions import (
    DocumentMalformedError,
    DocumentNotFoundError,
    PersistenceError,
)
from cloudsvc.scaffold import add_web_role, add_worker_role

pytestmark = pytest.mark.tier2

DEFINITION = "ServiceDefinition.yaml"
CLOUD = "ServiceConfiguration.Cloud.yaml"
LOCAL = "ServiceConfiguration.Local.yaml"


def _read(path: Path) -> dict:
    return yaml.safe_load(path.read_text(encoding="utf-8"))


def _write(path: Path, data: dict) -> None:
    path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")


class TestLoad:
    """Loading documents and enforcing load-time invariants."""

    def test_loads_new_project(self, service_root, store):
        project = store.load(service_root)

        assert project.name == "AzureService"
        assert project.definition.roles() == []
        assert list(project.settings) == ["Cloud", "Local"]
        assert project.settings["Cloud"].service_name == "AzureService"

    def test_scaffold_per_role(self, service_root, store):
        add_web_role(service_root)
        add_worker_role(service_root)

        project = store.load(service_root)

        assert set(project.scaffolds) == {"WebRole1", "WorkerRole1"}
        assert project.scaffold("WebRole1").path == service_root / "WebRole1"
        assert not project.has_staged_writes()

    def test_missing_definition(self, service_root, store):
        (service_root / DEFINITION).unlink()

        with pytest.raises(DocumentNotFoundError) as exc_info:
            store.load(service_root)

        assert exc_info.value.path == service_root / DEFINITION

    def test_missing_settings_document(self, service_root, store):
        (service_root / LOCAL).unlink()

        with pytest.raises(DocumentNotFoundError, match="Document not found"):
            store.load(service_root)

    def test_invalid_yaml(self, service_root, store):
        (service_root / CLOUD).write_text("roles: [unclosed\n", encoding="utf-8")

        with pytest.raises(DocumentMalformedError, match="Invalid YAML"):
            store.load(service_root)

    def test_root_not_a_mapping(self, service_root, store):
        (service_root / DEFINITION).write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(DocumentMalformedError, match="mapping"):
            store.load(service_root)

    def test_schema_violation(self, service_root, store):
        _write(service_root / DEFINITION, {"webRoles": []})

        with pytest.raises(DocumentMalformedError, match="validation failed"):
            store.load(service_root)

    def test_duplicate_role_names(self, service_root, store):
        """The same name under web and worker roles is rejected."""
        add_web_role(service_root, name="Front")
        definition = _read(service_root / DEFINITION)
        definition["workerRoles"] = [{"name": "Front"}]
        _write(service_root / DEFINITION, definition)

        with pytest.raises(DocumentMalformedError, match="Duplicate role name 'Front'"):
            store.load(service_root)

    def test_settings_missing_a_role(self, service_root, store):
        add_web_role(service_root)
        settings = _read(service_root / LOCAL)
        settings["roles"] = []
        _write(service_root / LOCAL, settings)

        with pytest.raises(DocumentMalformedError, match="No settings for roles: WebRole1") as exc_info:
            store.load(service_root)

        assert exc_info.value.path == service_root / LOCAL

    def test_settings_for_undeclared_role(self, service_root, store):
        settings = _read(service_root / CLOUD)
        settings["roles"] = [{"name": "Ghost", "instances": 1}]
        _write(service_root / CLOUD, settings)

        with pytest.raises(DocumentMalformedError, match="undeclared roles: Ghost"):
            store.load(service_root)

    def test_role_folder_optional(self, service_root, store):
        """A role whose folder was deleted still loads."""
        add_web_role(service_root)
        shutil.rmtree(service_root / "WebRole1")

        project = store.load(service_root)

        assert project.definition.role_names() == ["WebRole1"]


class TestSave:
    """Persisting documents and staged files."""

    def test_round_trip_keeps_unknown_keys(self, service_root, store):
        definition = _read(service_root / DEFINITION)
        definition["upgradeDomainCount"] = 3
        _write(service_root / DEFINITION, definition)

        store.save(store.load(service_root))

        assert _read(service_root / DEFINITION)["upgradeDomainCount"] == 3

    def test_round_trip_keeps_unknown_null_and_date_values(self, service_root, store):
        """Unknown keys come back exactly as loaded, not dropped or quoted."""
        (service_root / DEFINITION).write_text(
            (service_root / DEFINITION).read_text(encoding="utf-8")
            + "schemaVersion: null\nbuilt: 2024-01-02\n",
            encoding="utf-8",
        )

        store.save(store.load(service_root))

        text = (service_root / DEFINITION).read_text(encoding="utf-8")
        definition = _read(service_root / DEFINITION)
        assert "schemaVersion" in definition
        assert definition["schemaVersion"] is None
        assert definition["built"] == datetime.date(2024, 1, 2)
        assert "built: 2024-01-02\n" in text

    def test_unset_optional_fields_not_written(self, service_root, store):
        add_web_role(service_root)

        store.save(store.load(service_root))

        assert "null" not in (service_root / DEFINITION).read_text(encoding="utf-8")

    def test_writes_staged_files_and_clears_them(self, service_root, store):
        add_web_role(service_root)
        project = store.load(service_root)
        scaffold = project.scaffold("WebRole1")
        scaffold.stage("bin/extra.cmd", "echo hi\r\n")

        store.save(project)

        assert (service_root / "WebRole1" / "bin" / "extra.cmd").read_bytes() == b"echo hi\r\n"
        assert scaffold.staged == {}

    def test_staged_content_read_before_disk(self, service_root, store):
        add_web_role(service_root)
        project = store.load(service_root)
        scaffold = project.scaffold("WebRole1")

        assert "<configuration>" in store.read_scaffold_text(scaffold, "Web.cloud.config")

        scaffold.stage("Web.cloud.config", "<configuration />")

        assert store.read_scaffold_text(scaffold, "Web.cloud.config") == "<configuration />"
        assert store.read_scaffold_text(scaffold, "missing.config") is None

    def test_temp_write_failure_leaves_targets_untouched(
        self, service_root, store, snapshot, monkeypatch
    ):
        """A failure while writing temporaries changes nothing on disk."""
        add_web_role(service_root)
        before = snapshot(service_root)

        project = store.load(service_root)
        project.definition.web_roles[0].add_definition_setting("X")
        for settings in project.settings.values():
            settings.role("WebRole1").set_setting("X", "1")
        project.scaffold("WebRole1").stage("bin/extra.cmd", "echo hi")

        real_write = manager._write_temp
        calls = []

        def failing_write(target, data):
            calls.append(target)
            if len(calls) == 3:
                raise OSError("disk full")
            return real_write(target, data)

        monkeypatch.setattr(manager, "_write_temp", failing_write)

        with pytest.raises(PersistenceError, match="disk full") as exc_info:
            store.save(project)

        assert exc_info.value.path == service_root / LOCAL
        assert snapshot(service_root) == before
        assert not list(service_root.rglob("*.tmp"))

    def test_existing_tmp_files_left_alone(self, service_root, store):
        """Files that happen to end in .tmp are never used as scratch space."""
        user_file = service_root / (DEFINITION + ".tmp")
        user_file.write_bytes(b"my notes")

        store.save(store.load(service_root))

        assert user_file.read_bytes() == b"my notes"
        assert sorted(p.name for p in service_root.glob("*.tmp")) == [user_file.name]

    def test_existing_tmp_files_survive_failed_save(self, service_root, store, monkeypatch):
        user_file = service_root / (LOCAL + ".tmp")
        user_file.write_bytes(b"my notes")

        real_write = manager._write_temp

        def failing_write(target, data):
            if target.name == LOCAL:
                raise OSError("disk full")
            return real_write(target, data)

        monkeypatch.setattr(manager, "_write_temp", failing_write)

        with pytest.raises(PersistenceError):
            store.save(store.load(service_root))

        assert user_file.read_bytes() == b"my notes"
        assert sorted(p.name for p in service_root.glob("*.tmp")) == [user_file.name]

    def test_first_write_failure(self, service_root, store, snapshot, monkeypatch):
        before = snapshot(service_root)

        def failing_write(path, data):
            raise PermissionError("read-only")

        monkeypatch.setattr(manager, "_write_temp", failing_write)

        with pytest.raises(PersistenceError) as exc_info:
            store.save(store.load(service_root))

        assert exc_info.value.path == service_root / DEFINITION
        assert isinstance(exc_info.value.cause, PermissionError)
        assert snapshot(service_root) == before

    def test_saved_documents_use_camel_case(self, service_root, store):
        add_web_role(service_root)

        definition = _read(service_root / DEFINITION)
        settings = _read(service_root / CLOUD)

        assert "webRoles" in definition
        assert "commandLine" in definition["webRoles"][0]["startup"]["tasks"][0]
        assert settings["serviceName"] == "AzureService"
        assert "vmsize" in definition["webRoles"][0]
