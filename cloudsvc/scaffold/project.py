# cloudsvc/scaffold/project.py
"""
Create an empty cloud service project.

Usage:
    from cloudsvc.scaffold import new_service_project

    root = new_service_project("/work", "AzureService")
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from cloudsvc.core.exceptions import ProjectExistsError
from cloudsvc.logging.logger import get_logger
from cloudsvc.logging.tags import SCAFFOLD
from cloudsvc.model import Project, ServiceDefinition, ServiceSettings
from cloudsvc.store import DocumentStore

logger = get_logger(__name__)

DEFAULT_OS_FAMILY = "2"
DEFAULT_OS_VERSION = "*"


def new_service_project(
    parent: Path | str,
    name: str,
    store: Optional[DocumentStore] = None,
) -> Path:
    """
    Create <parent>/<name> with an empty definition and settings documents.

    Returns:
        The project root

    Raises:
        ProjectExistsError: The folder already exists and isn't empty
        PersistenceError: The documents couldn't be written
    """
    store = store or DocumentStore()
    root = Path(parent) / name

    if root.exists() and (not root.is_dir() or any(root.iterdir())):
        raise ProjectExistsError(root)

    paths = store.paths_for(root)
    project = Project(
        paths=paths,
        definition=ServiceDefinition(name=name),
        settings={
            env: ServiceSettings(
                service_name=name,
                os_family=DEFAULT_OS_FAMILY,
                os_version=DEFAULT_OS_VERSION,
            )
            for env in paths.environments()
        },
    )
    store.save(project)

    logger.info(f"{SCAFFOLD} Created service project {name!r} at {root}")
    return root
