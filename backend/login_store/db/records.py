"""Record store for the Login table."""

from __future__ import annotations

from login_store.core.metrics import STORE_LATENCY
from login_store.db.sqlite import SQLiteDatabase
from login_store.models.entities import Credential


class LoginStore:
    """Single-table insert and lookup against the Login table."""

    def __init__(self, db: SQLiteDatabase) -> None:
        self.db = db

    def insert(self, username: str, password: str) -> int:
        """Append a row and return its assigned id once committed."""
        with STORE_LATENCY.labels(operation="insert").time():
            with self.db.transaction() as cursor:
                cursor.execute(
                    "INSERT INTO Login (username, password) VALUES (?, ?)",
                    [username, password],
                )
                return int(cursor.lastrowid)

    def insert_credential(self, credential: Credential) -> Credential:
        # credential.id is never written; the store assigns it.
        new_id = self.insert(credential.username, credential.password)
        return Credential(username=credential.username, password=credential.password, id=new_id)

    def find_by_username(self, username: str) -> Credential | None:
        """Return the most recently inserted row with exactly this username."""
        with STORE_LATENCY.labels(operation="find_by_username").time():
            rows = self.db.query(
                "SELECT id, username, password FROM Login WHERE username = ? ORDER BY id DESC LIMIT 1",
                [username],
            )
        if not rows:
            return None
        return Credential.from_row(rows[0])

    def count(self) -> int:
        rows = self.db.query("SELECT COUNT(*) AS n FROM Login")
        return int(rows[0]["n"])


__all__ = ["LoginStore"]
