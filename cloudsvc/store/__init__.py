# cloudsvc/store/__init__.py
from .manager import DocumentStore, dump_document

__all__ = ["DocumentStore", "dump_document"]
