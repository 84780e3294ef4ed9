# cloudsvc/engine/__init__.py
from .enablement import EnablementEngine, enable_memcache

__all__ = ["EnablementEngine", "enable_memcache"]
