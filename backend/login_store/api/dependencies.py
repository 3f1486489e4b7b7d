"""Shared FastAPI dependencies."""

from __future__ import annotations

import threading
from functools import lru_cache

from login_store.core.config import Settings, get_settings
from login_store.repository import LoginRepository

_REPOSITORY: LoginRepository | None = None
_REPOSITORY_LOCK = threading.Lock()


@lru_cache(maxsize=1)
def get_app_settings() -> Settings:
    return get_settings()


def get_repository() -> LoginRepository:
    global _REPOSITORY
    if _REPOSITORY is None:
        with _REPOSITORY_LOCK:
            if _REPOSITORY is None:
                _REPOSITORY = LoginRepository(get_app_settings())
    return _REPOSITORY


def reset_repository() -> None:
    """Close and forget the process-wide repository."""
    global _REPOSITORY
    with _REPOSITORY_LOCK:
        repository, _REPOSITORY = _REPOSITORY, None
    if repository is not None:
        repository.close()


__all__ = [
    "get_app_settings",
    "get_repository",
    "reset_repository",
]
