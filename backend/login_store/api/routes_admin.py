"""Administrative routes for Login Store."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from login_store.api.dependencies import get_repository
from login_store.core.metrics import metrics_response
from login_store.models.dto import HealthResponse
from login_store.repository import LoginRepository

router = APIRouter()


@router.get("/health", response_model=HealthResponse, summary="Liveness and row count")
async def health(repository: LoginRepository = Depends(get_repository)) -> HealthResponse:
    return HealthResponse(ok=True, credentials=repository.initialize().count())


@router.get("/metrics", summary="Prometheus metrics")
async def metrics() -> Response:
    return metrics_response()
