# cloudsvc/cli/commands/enable.py
"""
Enable memcache on a web role.

Usage:
    cloudsvc enable-memcache WebRole1 CacheWorkerRole1
    cloudsvc enable-memcache WebRole1 CacheWorkerRole1 --path ./AzureService
"""

from __future__ import annotations

from pathlib import Path

from cloudsvc.cli.errors import reported_errors
from cloudsvc.cli.ui import ui
from cloudsvc.engine import EnablementEngine
from cloudsvc.features import FeatureId


def command(role_name: str, cache_worker_role_name: str, path: Path) -> None:
    with reported_errors():
        EnablementEngine().enable(path, role_name, cache_worker_role_name, FeatureId.MEMCACHE)

    ui.success(f"Enabled memcache on {role_name} using {cache_worker_role_name}")
