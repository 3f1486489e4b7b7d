"""Tests for the SQLite wrapper."""

import sqlite3
from pathlib import Path

import pytest

from login_store.core.errors import StorageError
from login_store.db import sqlite as sqlite_module
from login_store.db.sqlite import SQLiteDatabase


def test_ensure_schema_creates_login_table(tmp_path: Path) -> None:
    db = SQLiteDatabase(tmp_path / "nested" / "LOGIN_DATABASE")
    db.ensure_schema(version=1)
    columns = [row["name"] for row in db.query("PRAGMA table_info(Login)")]
    assert columns == ["id", "username", "password"]
    assert db.user_version() == 1
    db.close()


def test_version_change_wipes_and_recreates(tmp_path: Path) -> None:
    path = tmp_path / "LOGIN_DATABASE"
    db = SQLiteDatabase(path)
    db.ensure_schema(version=1)
    with db.transaction() as cursor:
        cursor.execute("INSERT INTO Login (username, password) VALUES ('a', 'b')")
    db.close()

    reopened = SQLiteDatabase(path)
    reopened.ensure_schema(version=2)
    assert reopened.query("SELECT COUNT(*) FROM Login")[0][0] == 0
    assert reopened.user_version() == 2
    reopened.close()


def test_version_change_without_fallback_raises(tmp_path: Path) -> None:
    path = tmp_path / "LOGIN_DATABASE"
    db = SQLiteDatabase(path)
    db.ensure_schema(version=1)
    db.close()

    with pytest.raises(StorageError):
        SQLiteDatabase(path).ensure_schema(version=2, destructive_fallback=False)


def test_sqlite_errors_become_storage_errors(tmp_path: Path) -> None:
    db = SQLiteDatabase(tmp_path / "LOGIN_DATABASE")
    with pytest.raises(StorageError) as excinfo:
        db.query("SELECT * FROM missing_table")
    assert isinstance(excinfo.value.__cause__, sqlite3.Error)
    db.close()


def test_transaction_rolls_back_on_error(tmp_path: Path) -> None:
    db = SQLiteDatabase(tmp_path / "LOGIN_DATABASE")
    db.ensure_schema()
    with pytest.raises(RuntimeError):
        with db.transaction() as cursor:
            cursor.execute("INSERT INTO Login (username, password) VALUES ('a', 'b')")
            raise RuntimeError("boom")
    assert db.query("SELECT COUNT(*) FROM Login")[0][0] == 0
    db.close()


def test_unusable_directory_is_storage_error(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("file")
    with pytest.raises(StorageError):
        SQLiteDatabase(blocker / "LOGIN_DATABASE").connect()


def test_missing_schema_file_is_storage_error(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(sqlite_module, "SCHEMA_PATH", tmp_path / "absent.sql")
    db = SQLiteDatabase(tmp_path / "LOGIN_DATABASE")
    with pytest.raises(StorageError) as excinfo:
        db.ensure_schema()
    assert excinfo.value.operation == "ensure_schema"
    db.close()
