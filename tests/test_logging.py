# tests/test_logging.py
"""
Tests for logging setup.
"""

from __future__ import annotations

import logging

import pytest

from cloudsvc.logging import configure_logging, get_logger
from cloudsvc.logging.tags import ENABLE

pytestmark = pytest.mark.tier1


def _handlers():
    return [h for h in logging.getLogger("cloudsvc").handlers if h.get_name() == "cloudsvc"]


class TestConfigureLogging:
    def test_handler_installed_once(self):
        configure_logging()
        configure_logging()

        assert len(_handlers()) == 1

    def test_level_by_name(self):
        configure_logging("debug")

        assert logging.getLogger("cloudsvc").level == logging.DEBUG

        configure_logging(logging.WARNING)

        assert logging.getLogger("cloudsvc").level == logging.WARNING

    def test_module_loggers_under_package(self, capsys):
        configure_logging("INFO")

        get_logger("cloudsvc.engine.enablement").info(f"{ENABLE} Enabled memcache")

        assert "[INFO] cloudsvc.engine.enablement - [ENABLE] Enabled memcache" in capsys.readouterr().out
