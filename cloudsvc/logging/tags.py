# cloudsvc/logging/tags.py
"""
Logging subsystem tags.

Used as message prefixes so log output stays searchable per subsystem.
"""

STORE = "[STORE]"
LOCATOR = "[LOCATOR]"
FEATURE = "[FEATURE]"
ENABLE = "[ENABLE]"
SCAFFOLD = "[SCAFFOLD]"
CONFIG = "[CONFIG]"
CLI = "[CLI]"
