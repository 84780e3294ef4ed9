# tests/conftest.py
"""
Shared fixtures for cloudsvc tests.

Test Tiers:
=====================================
- tier1: pure logic, no I/O
         Run: pytest -m tier1
- tier2: file-system work under tmp_path
         Run: pytest -m "tier1 or tier2"
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict

import pytest

from cloudsvc.scaffold import (
    add_cache_worker_role,
    add_web_role,
    new_service_project,
)
from cloudsvc.store import DocumentStore

SERVICE_NAME = "AzureService"


def _snapshot(root: Path) -> Dict[str, bytes]:
    return {
        p.relative_to(root).as_posix(): p.read_bytes()
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }


@pytest.fixture
def snapshot() -> Callable[[Path], Dict[str, bytes]]:
    """Every file under a folder, keyed by relative path."""
    return _snapshot


@pytest.fixture
def store() -> DocumentStore:
    return DocumentStore()


@pytest.fixture
def service_root(tmp_path: Path) -> Path:
    """An empty service project."""
    return new_service_project(tmp_path, SERVICE_NAME)


@pytest.fixture
def memcache_project(service_root: Path) -> Path:
    """A project with WebRole1 and CacheWorkerRole1, ready for memcache."""
    add_web_role(service_root)
    add_cache_worker_role(service_root)
    return service_root
