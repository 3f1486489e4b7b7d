"""Internal dataclasses representing persisted entities."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass, field


@dataclass(slots=True)
class Credential:
    """A username/password row of the Login table.

    ``id`` is assigned by the store on insert; a caller-supplied value is never
    written. The password is kept in plain text.
    """

    username: str
    password: str = field(repr=False)
    id: int | None = None

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "Credential":
        return cls(username=row["username"], password=row["password"], id=row["id"])
