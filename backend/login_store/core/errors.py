"""Exception types raised by Login Store."""

from __future__ import annotations


class LoginStoreError(Exception):
    """Base class for Login Store failures."""


class StorageError(LoginStoreError):
    """The backing database is unavailable, failed an I/O call, or is corrupt."""

    def __init__(self, message: str, *, operation: str | None = None) -> None:
        super().__init__(message)
        self.operation = operation


__all__ = ["LoginStoreError", "StorageError"]
