# cloudsvc/cli/commands/new.py
"""
Create a new service project.

Usage:
    cloudsvc new AzureService
    cloudsvc new AzureService --path ./work
"""

from __future__ import annotations

from pathlib import Path

from cloudsvc.cli.errors import reported_errors
from cloudsvc.cli.ui import ui
from cloudsvc.scaffold import new_service_project


def command(name: str, path: Path) -> None:
    with reported_errors():
        root = new_service_project(path, name)

    ui.success(f"Created service project {name} at {root}")
