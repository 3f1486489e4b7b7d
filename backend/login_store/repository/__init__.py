"""Credential repository and fetch states."""

from .login_repository import LoginRepository
from .types import FetchState, FetchStatus

__all__ = ["LoginRepository", "FetchState", "FetchStatus"]
