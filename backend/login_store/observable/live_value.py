"""Single-slot observable value with replay-last subscription."""

from __future__ import annotations

import threading
from typing import Callable, Generic, TypeVar

from login_store.core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

_MISSING = object()


class Subscription(Generic[T]):
    """Handle returned by :meth:`LiveValue.subscribe`."""

    def __init__(self, owner: "LiveValue[T]", callback: Callable[[T], None]) -> None:
        self._owner = owner
        self.callback = callback
        self.active = True

    def cancel(self) -> None:
        self.active = False
        self._owner._remove(self)

    def _deliver(self, value: T) -> None:
        if not self.active:
            return
        try:
            self.callback(value)
        except Exception:
            logger.exception("Subscriber %r raised while handling a published value", self.callback)


class LiveValue(Generic[T]):
    """Hold the latest published value and notify subscribers on change.

    Only the most recent value is kept. New subscribers receive it immediately
    if one exists, then every later value in publish order.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition()
        # Held while callbacks run so a replay and a publish never interleave.
        self._delivery = threading.RLock()
        self._value: object = _MISSING
        self._subscriptions: list[Subscription[T]] = []

    @property
    def has_value(self) -> bool:
        with self._cond:
            return self._value is not _MISSING

    @property
    def value(self) -> T | None:
        with self._cond:
            return None if self._value is _MISSING else self._value  # type: ignore[return-value]

    def subscribe(self, callback: Callable[[T], None]) -> Subscription[T]:
        subscription: Subscription[T] = Subscription(self, callback)
        with self._delivery:
            with self._cond:
                self._subscriptions.append(subscription)
                current = self._value
            if current is not _MISSING:
                subscription._deliver(current)  # type: ignore[arg-type]
        return subscription

    def publish(self, value: T) -> None:
        with self._delivery:
            with self._cond:
                self._value = value
                targets = list(self._subscriptions)
                self._cond.notify_all()
            for subscription in targets:
                subscription._deliver(value)

    def wait_for(self, predicate: Callable[[T], bool], timeout: float | None = None) -> T | None:
        """Block until the current value satisfies ``predicate``; None on timeout."""
        with self._cond:
            matched = self._cond.wait_for(
                lambda: self._value is not _MISSING and predicate(self._value),  # type: ignore[arg-type]
                timeout=timeout,
            )
            return self._value if matched else None  # type: ignore[return-value]

    def subscriber_count(self) -> int:
        with self._cond:
            return len(self._subscriptions)

    def _remove(self, subscription: Subscription[T]) -> None:
        with self._cond:
            if subscription in self._subscriptions:
                self._subscriptions.remove(subscription)


__all__ = ["LiveValue", "Subscription"]
