"""Pydantic DTOs exposed via API."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from login_store.models.entities import Credential


class CredentialCreateRequest(BaseModel):
    username: str = Field(description="Lookup key; not required to be unique")
    password: str = Field(description="Stored as given, without hashing")


class SaveAcceptedResponse(BaseModel):
    status: Literal["accepted"] = "accepted"


class SaveCompletedResponse(BaseModel):
    id: int


class CredentialResponse(BaseModel):
    id: int
    username: str
    password: str

    @classmethod
    def from_entity(cls, credential: Credential) -> "CredentialResponse":
        return cls(id=credential.id, username=credential.username, password=credential.password)


class HealthResponse(BaseModel):
    ok: bool
    credentials: int


__all__ = [
    "CredentialCreateRequest",
    "SaveAcceptedResponse",
    "SaveCompletedResponse",
    "CredentialResponse",
    "HealthResponse",
]
