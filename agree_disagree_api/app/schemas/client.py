"""
Pydantic schemas for the client management API.

A client is a named store.  Its name becomes the first path segment of
the store's routes, so it must be a plain path segment: unreserved URL
characters only, never ``.``/``..`` and never template braces, which
the router would otherwise read as path parameters.
"""

import re
from typing import List

from pydantic import BaseModel, Field, field_validator


CLIENT_NAME_PATTERN = re.compile(r"[A-Za-z0-9._~-]+")


def is_valid_client_name(name: str) -> bool:
    return bool(CLIENT_NAME_PATTERN.fullmatch(name)) and name not in {".", ".."}


class ClientCreate(BaseModel):
    """Schema for opening a new store."""

    name: str = Field(..., min_length=1, examples=["demo"], description="Client name used as the route prefix")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not is_valid_client_name(v):
            raise ValueError("Client name must be a plain path segment of letters, digits, '.', '_', '~' or '-'")
        return v


class ClientRead(BaseModel):
    """Schema for reading an open store."""

    name: str
    paths: List[str]
    questions: int
    users: int
