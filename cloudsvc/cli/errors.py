# cloudsvc/cli/errors.py
"""Turn library errors into CLI output and exit codes."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

import typer

from cloudsvc.cli.ui import ui
from cloudsvc.core.exceptions import CloudServiceError
from cloudsvc.logging.logger import get_logger
from cloudsvc.logging.tags import CLI

logger = get_logger(__name__)


@contextmanager
def reported_errors() -> Iterator[None]:
    """Print any cloudsvc error as one line and exit 1."""
    try:
        yield
    except CloudServiceError as e:
        logger.debug(f"{CLI} Command failed: {type(e).__name__}")
        ui.error(str(e))
        raise typer.Exit(1) from e
