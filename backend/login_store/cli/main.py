"""CLI entrypoint for Login Store."""

from __future__ import annotations

import json
import os
from typing import Optional
from urllib.parse import quote

import requests
import typer

app = typer.Typer(name="login-store", help="Login Store command-line interface")

DEFAULT_HOST = "http://127.0.0.1:5180"


def _resolve_host(override: Optional[str]) -> str:
    if override:
        return override.rstrip('/')
    env_host = os.environ.get("LOGIN_STORE_HOST")
    if env_host:
        return env_host.rstrip('/')
    return DEFAULT_HOST


def _request(method: str, path: str, host: Optional[str] = None, **kwargs) -> requests.Response:
    base = _resolve_host(host)
    url = f"{base}{path}"
    resp = requests.request(method, url, timeout=30, **kwargs)
    if not resp.ok:
        try:
            detail = resp.json()
        except ValueError:
            detail = resp.text
        typer.echo(f"Request failed ({resp.status_code}): {detail}", err=True)
        raise typer.Exit(code=1)
    return resp


@app.command()
def save(
    username: str = typer.Argument(..., help="Username to store"),
    password: str = typer.Argument(..., help="Password to store (kept in plain text)"),
    wait: bool = typer.Option(False, "--wait", help="Wait for the write and print the assigned id"),
    host: Optional[str] = typer.Option(None, "--host", help="Override backend host"),
) -> None:
    """Save a username/password pair."""
    params = {"wait": "true"} if wait else None
    resp = _request(
        "POST",
        "/logins",
        host=host,
        json={"username": username, "password": password},
        params=params,
    )
    typer.echo(json.dumps(resp.json(), indent=2))


@app.command()
def fetch(
    username: str = typer.Argument(..., help="Username to look up"),
    host: Optional[str] = typer.Option(None, "--host", help="Override backend host"),
) -> None:
    """Fetch the most recent credential saved for a username."""
    resp = _request("GET", f"/logins/{quote(username, safe='')}", host=host)
    typer.echo(json.dumps(resp.json(), indent=2))


@app.command()
def health(
    host: Optional[str] = typer.Option(None, "--host", help="Override backend host"),
) -> None:
    """Check that the backend is up."""
    resp = _request("GET", "/health", host=host)
    typer.echo(json.dumps(resp.json(), indent=2))


if __name__ == "__main__":
    app()
