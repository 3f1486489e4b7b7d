"""Prometheus metrics instrumentation."""

from __future__ import annotations

from fastapi import Response
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

REGISTRY = CollectorRegistry()

SAVE_COUNT = Counter(
    "login_saves_total",
    "Credential saves by outcome",
    labelnames=("status",),
    registry=REGISTRY,
)

FETCH_COUNT = Counter(
    "login_fetches_total",
    "Credential fetches by outcome",
    labelnames=("status",),
    registry=REGISTRY,
)

STORE_LATENCY = Histogram(
    "login_store_latency_seconds",
    "Latency of record store calls",
    labelnames=("operation",),
    registry=REGISTRY,
)


def metrics_response() -> Response:
    """Return Prometheus metrics as an HTTP response."""
    payload = generate_latest(REGISTRY)
    return Response(content=payload, media_type=CONTENT_TYPE_LATEST)


__all__ = [
    "REGISTRY",
    "SAVE_COUNT",
    "FETCH_COUNT",
    "STORE_LATENCY",
    "metrics_response",
]
