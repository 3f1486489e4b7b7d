"""Caller-facing facade over the login repository."""

from __future__ import annotations

from concurrent.futures import Future

from login_store.observable import LiveValue
from login_store.repository import FetchState, LoginRepository


class LoginViewModel:
    """Holds the last fetch handle for a screen or other caller."""

    def __init__(self, repository: LoginRepository) -> None:
        self.repository = repository
        self.live_data_login: LiveValue[FetchState] | None = None

    def insert_data(self, username: str, password: str) -> Future[int]:
        return self.repository.save(username, password)

    def get_login_details(self, username: str) -> LiveValue[FetchState]:
        self.live_data_login = self.repository.fetch(username)
        return self.live_data_login


__all__ = ["LoginViewModel"]
