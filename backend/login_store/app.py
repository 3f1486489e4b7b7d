"""FastAPI application setup for Login Store."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from login_store.api.dependencies import get_app_settings, get_repository, reset_repository
from login_store.api.routes_admin import router as admin_router
from login_store.api.routes_logins import router as logins_router
from login_store.core.errors import StorageError
from login_store.core.logging import configure_logging, get_logger

configure_logging()
logger = get_logger(__name__)

app = FastAPI(
    title="Login Store",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.include_router(logins_router, prefix="", tags=["logins"])
app.include_router(admin_router, prefix="", tags=["admin"])


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    logger.error("Storage failure on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": str(exc)})


@app.on_event("startup")
async def startup() -> None:
    """Open the store before the first request arrives."""
    get_app_settings()
    get_repository().initialize()


@app.on_event("shutdown")
async def shutdown() -> None:
    reset_repository()
