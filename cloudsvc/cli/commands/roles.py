# cloudsvc/cli/commands/roles.py
"""
List the roles of a project.

Usage:
    cloudsvc roles
    cloudsvc roles --path ./AzureService
"""

from __future__ import annotations

from pathlib import Path

from cloudsvc.cli.errors import reported_errors
from cloudsvc.cli.ui import ui
from cloudsvc.store import DocumentStore


def command(path: Path) -> None:
    with reported_errors():
        project = DocumentStore().load(path)

    roles = project.definition.roles()
    if not roles:
        ui.info(f"No roles in {project.name}")
        return

    rows = []
    for role in roles:
        instances = ", ".join(
            f"{env}={entry.instances}"
            for env, doc in project.settings.items()
            if (entry := doc.role(role.name)) is not None
        )
        endpoints = ", ".join(
            f"{e.name} ({e.protocol.value}:{e.port})"
            for e in [*role.endpoints.input, *role.endpoints.internal]
        )
        rows.append((role.name, role.kind.value, instances, endpoints or "-", ", ".join(role.runtimes()) or "-"))

    ui.table(project.name, ["Role", "Kind", "Instances", "Endpoints", "Runtimes"], rows)
