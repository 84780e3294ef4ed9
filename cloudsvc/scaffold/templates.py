# cloudsvc/scaffold/templates.py
"""
Packaged scaffolding templates.

Each template is a folder under cloudsvc/scaffold/templates/ whose files are
copied into a role folder. Copies are staged on the role's scaffold and
written by the document store; files already present in the role folder are
kept.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, List, Tuple

from cloudsvc.logging.logger import get_logger
from cloudsvc.logging.tags import SCAFFOLD
from cloudsvc.model import RoleScaffold

if TYPE_CHECKING:
    from cloudsvc.store import DocumentStore

logger = get_logger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"


def template_dir(name: str) -> Path:
    path = TEMPLATES_DIR / name
    if not path.is_dir():
        raise FileNotFoundError(f"No scaffolding template {name!r} at {path}")
    return path


def template_files(name: str) -> List[Tuple[str, bytes]]:
    """(relative posix path, content) for every file in a template, sorted."""
    root = template_dir(name)
    return [
        (p.relative_to(root).as_posix(), p.read_bytes())
        for p in sorted(root.rglob("*"))
        if p.is_file()
    ]


def stage_template(store: "DocumentStore", scaffold: RoleScaffold, name: str) -> List[str]:
    """
    Stage a template's files on a role scaffold.

    Returns:
        Relative paths staged; files the role already has are skipped
    """
    staged = []
    for relative, content in template_files(name):
        if store.has_scaffold_file(scaffold, relative):
            logger.debug(f"{SCAFFOLD} Keeping existing {scaffold.role_name}/{relative}")
            continue
        scaffold.stage(relative, content)
        staged.append(relative)
    return staged
