# cloudsvc/config/__init__.py
from .loader import deep_merge, load_config, load_defaults, load_project_config
from .schema import CloudSvcConfig

__all__ = [
    "CloudSvcConfig",
    "deep_merge",
    "load_config",
    "load_defaults",
    "load_project_config",
]
