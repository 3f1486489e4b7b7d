"""Repository coordinating background storage work and result delivery."""

from __future__ import annotations

import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor

from login_store.core.config import Settings
from login_store.core.errors import StorageError
from login_store.core.logging import get_logger
from login_store.core.metrics import FETCH_COUNT, SAVE_COUNT
from login_store.db.records import LoginStore
from login_store.db.sqlite import SQLiteDatabase
from login_store.models.entities import Credential
from login_store.observable import Dispatcher, LiveValue, SerialDispatcher
from login_store.repository.types import FetchState

logger = get_logger(__name__)


class LoginRepository:
    """Entry point for saving and fetching credentials.

    Storage calls run on a background executor. Fetch results are published
    to :attr:`login_details` through the foreground dispatcher, so subscriber
    callbacks never run on the I/O threads. The store itself is opened once,
    on first use, and shared by every call.
    """

    def __init__(
        self,
        settings: Settings,
        dispatcher: Dispatcher | None = None,
        executor: Executor | None = None,
    ) -> None:
        self.settings = settings
        self.dispatcher: Dispatcher = dispatcher or SerialDispatcher()
        self._owns_executor = executor is None
        self.executor: Executor = executor or ThreadPoolExecutor(
            max_workers=settings.io_workers,
            thread_name_prefix="login-io",
        )
        self.login_details: LiveValue[FetchState] = LiveValue()
        self._db: SQLiteDatabase | None = None
        self._store: LoginStore | None = None
        self._init_lock = threading.Lock()
        self._generation = 0
        self._active_username: str | None = None
        self._generation_lock = threading.Lock()

    def initialize(self) -> LoginStore:
        """Open the database on first call; later calls return the same store."""
        store = self._store
        if store is not None:
            return store
        with self._init_lock:
            if self._store is None:
                db = SQLiteDatabase(self.settings.db_path, busy_timeout_ms=self.settings.busy_timeout_ms)
                try:
                    db.ensure_schema(
                        version=self.settings.schema_version,
                        destructive_fallback=self.settings.destructive_migration,
                    )
                except StorageError:
                    db.close()
                    raise
                self._db = db
                self._store = LoginStore(db)
                logger.info("Opened login database at %s", self.settings.db_path)
            return self._store

    def save(self, username: str, password: str) -> Future[int]:
        """Insert a credential in the background.

        The returned future resolves to the assigned id, or carries the
        StorageError. Callers may ignore it; saves are not ordered relative to
        each other.
        """
        future = self.executor.submit(self._insert, username, password)
        future.add_done_callback(_record_save_outcome)
        return future

    def fetch(self, username: str) -> LiveValue[FetchState]:
        """Look up ``username`` in the background and publish the outcome.

        Always returns the same holder. Only the latest fetch may publish into
        it; results from superseded fetches are dropped. Until another fetch
        replaces it, a later save for the same username re-runs the query and
        publishes the fresh result.
        """
        with self._generation_lock:
            self._generation += 1
            generation = self._generation
            self._active_username = username
        self.dispatcher.post(self._publish, generation, FetchState.pending(username))
        future = self.executor.submit(self._query, generation, username)
        future.add_done_callback(_log_unexpected)
        return self.login_details

    def lookup(self, username: str) -> Future[Credential | None]:
        """Query in the background without touching :attr:`login_details`."""
        return self.executor.submit(self._find, username)

    def close(self) -> None:
        if self._owns_executor:
            self.executor.shutdown(wait=True)
        self.dispatcher.close()
        with self._init_lock:
            if self._db is not None:
                self._db.close()
            self._db = None
            self._store = None

    def __enter__(self) -> "LoginRepository":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # Internal helpers -------------------------------------------------

    def _insert(self, username: str, password: str) -> int:
        new_id = self.initialize().insert(username, password)
        with self._generation_lock:
            generation, active = self._generation, self._active_username
        if active == username:
            # The watched username changed; refresh the holder without a Pending step.
            self._query(generation, username)
        return new_id

    def _find(self, username: str) -> Credential | None:
        return self.initialize().find_by_username(username)

    def _query(self, generation: int, username: str) -> None:
        try:
            credential = self._find(username)
        except StorageError as exc:
            FETCH_COUNT.labels(status="failed").inc()
            logger.error("Fetch failed: %s", exc, extra={"ctx_operation": exc.operation})
            state = FetchState.failed(username, exc)
        else:
            FETCH_COUNT.labels(status="found" if credential else "not_found").inc()
            state = FetchState.completed(username, credential)
        self.dispatcher.post(self._publish, generation, state)

    def _publish(self, generation: int, state: FetchState) -> None:
        if generation != self._generation:
            logger.debug("Dropping %s result from superseded fetch %s", state.status.value, generation)
            return
        self.login_details.publish(state)


def _record_save_outcome(future: Future) -> None:
    exc = future.exception()
    if exc is None:
        SAVE_COUNT.labels(status="ok").inc()
        logger.debug("Saved credential", extra={"ctx_id": future.result()})
        return
    SAVE_COUNT.labels(status="failed").inc()
    logger.error("Save failed: %s", exc, exc_info=exc)


def _log_unexpected(future: Future) -> None:
    exc = future.exception()
    if exc is not None:
        logger.error("Background fetch crashed", exc_info=exc)


__all__ = ["LoginRepository"]
