# cloudsvc/core/exceptions.py
"""
Error taxonomy for cloudsvc.

Every error a caller can act on derives from CloudServiceError, and its
str() is the caller-visible message. The CLI prints that text verbatim.

Hierarchy:
    CloudServiceError
    ├── DocumentError
    │   ├── DocumentNotFoundError
    │   └── DocumentMalformedError
    ├── PersistenceError
    ├── ProjectExistsError
    ├── RoleError
    │   ├── RoleNotFoundError
    │   ├── RoleAlreadyExistsError
    │   └── WrongRoleKindError
    └── EnablementError
        ├── UnsupportedRoleKindError
        ├── NotAFeatureProviderError
        └── AlreadyEnabledError
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class CloudServiceError(Exception):
    """Base error for all cloudsvc operations."""

    pass


# =============================================================================
# Documents
# =============================================================================


class DocumentError(CloudServiceError):
    """Base error for project documents and scaffold files."""

    def __init__(self, message: str, path: Optional[Path] = None):
        self.path = path
        if path:
            message = f"{message} (file: {path})"
        super().__init__(message)


class DocumentNotFoundError(DocumentError):
    """Raised when a project document doesn't exist."""

    def __init__(self, path: Path):
        super().__init__("Document not found", path=path)


class DocumentMalformedError(DocumentError):
    """Raised when a document can't be parsed or breaks a load-time invariant."""

    pass


class PersistenceError(CloudServiceError):
    """Raised when one or more project files can't be written."""

    def __init__(self, path: Path, cause: OSError):
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to write {path}: {cause}")


class ProjectExistsError(CloudServiceError):
    """Raised when creating a project in a non-empty folder."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Project folder {path} already exists.")


# =============================================================================
# Roles
# =============================================================================


class RoleError(CloudServiceError):
    """Base error for role lookups."""

    def __init__(self, message: str, role_name: str):
        self.role_name = role_name
        super().__init__(message)


class RoleNotFoundError(RoleError):
    def __init__(self, role_name: str):
        super().__init__(f"Role with name {role_name} does not exist.", role_name)


class RoleAlreadyExistsError(RoleError):
    def __init__(self, role_name: str):
        super().__init__(f"Role with name {role_name} already exists.", role_name)


class WrongRoleKindError(RoleError):
    """Raised when a role exists but is not of the expected kind."""

    def __init__(self, role_name: str, expected: str, actual: str):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Role {role_name} is a {actual} role, expected a {expected} role.",
            role_name,
        )


# =============================================================================
# Feature enablement
# =============================================================================


class EnablementError(CloudServiceError):
    """Base error for feature enablement validation."""

    def __init__(self, message: str, role_name: str, feature: str):
        self.role_name = role_name
        self.feature = feature
        super().__init__(message)


class UnsupportedRoleKindError(EnablementError):
    """The consumer role is not the kind the feature requires."""

    def __init__(self, role_name: str, feature: str, kind: str):
        self.kind = kind
        super().__init__(f"Cannot enable {feature} on {kind} role {role_name}.", role_name, feature)


class NotAFeatureProviderError(EnablementError):
    """The provider role is not scaffolded to host the feature."""

    def __init__(self, role_name: str, feature: str):
        super().__init__(f"{role_name} is not a {feature}-capable role.", role_name, feature)


class AlreadyEnabledError(EnablementError):
    """The consumer role already carries the feature."""

    def __init__(self, role_name: str, feature: str):
        super().__init__(f"{feature} has already been enabled for {role_name}.", role_name, feature)
