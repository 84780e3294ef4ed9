# cloudsvc/cli/commands/add_role.py
"""
Add a role to the project in the given folder.

Usage:
    cloudsvc add-web-role
    cloudsvc add-worker-role --name Backend --instances 2
    cloudsvc add-cache-worker-role --path ./AzureService
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from cloudsvc.cli.errors import reported_errors
from cloudsvc.cli.ui import ui
from cloudsvc.scaffold import RoleTemplate, add_role

_LABELS = {
    RoleTemplate.WEB: "web role",
    RoleTemplate.WORKER: "worker role",
    RoleTemplate.CACHE_WORKER: "cache worker role",
}


def command(template: RoleTemplate, name: Optional[str], instances: int, path: Path) -> None:
    with reported_errors():
        role_name = add_role(path, template, name=name, instances=instances)

    ui.success(f"Added {_LABELS[template]} {role_name} ({instances} instance(s))")
