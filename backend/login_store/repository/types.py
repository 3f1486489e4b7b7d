"""Fetch result states published to subscribers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from login_store.models.entities import Credential


class FetchStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class FetchState:
    """Outcome of the most recent fetch.

    A lookup that matched nothing is ``COMPLETED`` with ``credential`` set to
    None; ``FAILED`` is reserved for storage errors.
    """

    status: FetchStatus
    username: str | None = None
    credential: Credential | None = None
    error: BaseException | None = None

    @property
    def found(self) -> bool:
        return self.status is FetchStatus.COMPLETED and self.credential is not None

    @property
    def is_terminal(self) -> bool:
        return self.status in (FetchStatus.COMPLETED, FetchStatus.FAILED)

    @classmethod
    def pending(cls, username: str) -> "FetchState":
        return cls(status=FetchStatus.PENDING, username=username)

    @classmethod
    def completed(cls, username: str, credential: Credential | None) -> "FetchState":
        return cls(status=FetchStatus.COMPLETED, username=username, credential=credential)

    @classmethod
    def failed(cls, username: str, error: BaseException) -> "FetchState":
        return cls(status=FetchStatus.FAILED, username=username, error=error)


__all__ = ["FetchStatus", "FetchState"]
