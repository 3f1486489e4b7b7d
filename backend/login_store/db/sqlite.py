"""SQLite management utilities."""

from __future__ import annotations

import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Sequence

from login_store.core.errors import StorageError
from login_store.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_PRAGMAS = (
    "PRAGMA journal_mode=WAL;",
    "PRAGMA synchronous=FULL;",
    "PRAGMA temp_store=MEMORY;",
)

MANAGED_TABLES = ("Login",)
SCHEMA_PATH = Path(__file__).with_name("schema.sql")


@contextmanager
def storage_errors(operation: str) -> Iterator[None]:
    """Re-raise sqlite3 and filesystem failures as StorageError."""
    try:
        yield
    except (sqlite3.Error, OSError) as exc:
        raise StorageError(f"{operation} failed: {exc}", operation=operation) from exc


class SQLiteDatabase:
    """Thin wrapper around sqlite3 with one connection per calling thread."""

    def __init__(self, db_path: Path, busy_timeout_ms: int = 5000) -> None:
        self.db_path = db_path.expanduser()
        self.busy_timeout_ms = busy_timeout_ms
        self._local = threading.local()
        self._connections: list[sqlite3.Connection] = []
        self._lock = threading.Lock()

    def connect(self) -> sqlite3.Connection:
        connection: sqlite3.Connection | None = getattr(self._local, "connection", None)
        if connection is None:
            with storage_errors("connect"):
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
                connection = sqlite3.connect(
                    self.db_path,
                    timeout=self.busy_timeout_ms / 1000,
                    check_same_thread=False,
                )
                connection.row_factory = sqlite3.Row
                connection.execute(f"PRAGMA busy_timeout={int(self.busy_timeout_ms)};")
                for pragma in DEFAULT_PRAGMAS:
                    connection.execute(pragma)
            self._local.connection = connection
            with self._lock:
                self._connections.append(connection)
            logger.debug("Opened connection to %s", self.db_path)
        return connection

    def close(self) -> None:
        with self._lock:
            connections, self._connections = self._connections, []
        for connection in connections:
            connection.close()
        self._local = threading.local()

    def commit(self) -> None:
        with storage_errors("commit"):
            self.connect().commit()

    def rollback(self) -> None:
        with storage_errors("rollback"):
            self.connect().rollback()

    def executescript(self, script: str) -> None:
        with storage_errors("executescript"):
            self.connect().executescript(script)

    def execute(self, sql: str, params: Sequence[Any] | None = None) -> sqlite3.Cursor:
        with storage_errors("execute"):
            return self.connect().execute(sql, params or [])

    def query(self, sql: str, params: Sequence[Any] | None = None) -> list[sqlite3.Row]:
        with storage_errors("query"):
            return self.connect().execute(sql, params or []).fetchall()

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Cursor]:
        conn = self.connect()
        with storage_errors("transaction"):
            cursor = conn.cursor()
            try:
                yield cursor
                conn.commit()
            except Exception:
                conn.rollback()
                raise
            finally:
                cursor.close()

    def user_version(self) -> int:
        row = self.execute("PRAGMA user_version;").fetchone()
        return int(row[0])

    def ensure_schema(
        self,
        version: int = 1,
        destructive_fallback: bool = True,
        schema_sql: str | None = None,
    ) -> None:
        """Create the schema, wiping managed tables when the stored version differs."""
        current = self.user_version()
        if current not in (0, version):
            if not destructive_fallback:
                raise StorageError(
                    f"Schema version {current} does not match expected {version}",
                    operation="ensure_schema",
                )
            logger.warning(
                "Schema version changed from %s to %s; recreating tables",
                current,
                version,
            )
            self.executescript(
                "".join(f"DROP TABLE IF EXISTS {table};" for table in MANAGED_TABLES)
            )
        if schema_sql is None:
            with storage_errors("ensure_schema"):
                schema_sql = SCHEMA_PATH.read_text(encoding="utf-8")
        self.executescript(schema_sql)
        self.executescript(f"PRAGMA user_version={int(version)};")


__all__ = ["SQLiteDatabase", "storage_errors"]
