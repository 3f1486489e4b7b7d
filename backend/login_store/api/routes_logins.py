"""Credential API routes."""

from __future__ import annotations

import asyncio

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from login_store.api.dependencies import get_repository
from login_store.models.dto import (
    CredentialCreateRequest,
    CredentialResponse,
    SaveAcceptedResponse,
    SaveCompletedResponse,
)
from login_store.repository import LoginRepository

router = APIRouter()


@router.post(
    "/logins",
    status_code=202,
    response_model=SaveCompletedResponse | SaveAcceptedResponse,
    summary="Save a credential",
)
async def save_login(
    request: CredentialCreateRequest,
    response: Response,
    wait: bool = Query(default=False, description="Wait for the write and return the assigned id"),
    repository: LoginRepository = Depends(get_repository),
) -> SaveCompletedResponse | SaveAcceptedResponse:
    future = repository.save(request.username, request.password)
    if not wait:
        return SaveAcceptedResponse()
    new_id = await asyncio.wrap_future(future)
    response.status_code = 201
    return SaveCompletedResponse(id=new_id)


@router.get("/logins/{username}", response_model=CredentialResponse, summary="Fetch a credential by username")
async def fetch_login(
    username: str,
    repository: LoginRepository = Depends(get_repository),
) -> CredentialResponse:
    credential = await asyncio.wrap_future(repository.lookup(username))
    if credential is None:
        raise HTTPException(status_code=404, detail="Credential not found")
    return CredentialResponse.from_entity(credential)
