# cloudsvc/roles/__init__.py
from .locator import expect_kind, find_role, next_role_name, role_exists

__all__ = ["expect_kind", "find_role", "next_role_name", "role_exists"]
