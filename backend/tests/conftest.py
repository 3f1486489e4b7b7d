"""Test fixtures for Login Store."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))


@pytest.fixture(autouse=True)
def reset_state(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Reset global singletons and environment between tests."""
    monkeypatch.setenv("LOGIN_STORE_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.delenv("LOGIN_STORE_CONFIG", raising=False)

    from login_store.api import dependencies as deps
    from login_store.core import config

    config.get_settings.cache_clear()
    deps.get_app_settings.cache_clear()
    deps.reset_repository()
    yield
    deps.reset_repository()
    config.get_settings.cache_clear()
    deps.get_app_settings.cache_clear()


@pytest.fixture
def settings(tmp_path: Path):
    from login_store.core.config import Settings

    return Settings(data_dir=tmp_path / "data", io_workers=4)


@pytest.fixture
def repository(settings):
    from login_store.repository import LoginRepository

    repo = LoginRepository(settings)
    yield repo
    repo.close()


@pytest.fixture
def broken_settings(tmp_path: Path):
    """Settings whose data directory is a regular file, so the store cannot open."""
    from login_store.core.config import Settings

    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    return Settings(data_dir=blocker)
