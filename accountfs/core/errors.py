"""
ACCOUNTFS - Custom Exception Classes

Defines the exception hierarchy for the application.
All custom exceptions inherit from AccountFsError.

Operation errors carry the errno reported back to the FUSE host.
"""

import errno as _errno
from typing import Optional


class AccountFsError(Exception):
    """Base exception for all ACCOUNTFS errors."""

    errno: Optional[int] = None

    def __init__(self, path: str = "", message: str = ""):
        self.path = path
        super().__init__(message or f"{type(self).__name__}: {path}")


class NotFoundError(AccountFsError):
    """Raised when a path does not resolve to an entity."""

    errno = _errno.ENOENT


class AlreadyExistsError(AccountFsError):
    """Raised when creating an account that already exists."""

    errno = _errno.EEXIST


class PermissionDeniedError(AccountFsError):
    """Raised for structurally disallowed mutations."""

    errno = _errno.EPERM


class IOFailureError(AccountFsError):
    """Raised when an external account command fails or cannot be run."""

    errno = _errno.EIO


class ConfigurationError(AccountFsError):
    """Raised when there are configuration issues."""

    pass
