# cloudsvc/cli/__init__.py
from .cli import app

__all__ = ["app"]
