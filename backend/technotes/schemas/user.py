"""Pydantic schemas for user operations.

Request bodies accept missing fields so the service can report them with its
own messages; only wrong JSON types are rejected at decode time.
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, StrictBool, StrictStr


class UserCreate(BaseModel):
    username: StrictStr | None = None
    password: StrictStr | None = None
    roles: list[StrictStr] | None = None


class UserUpdate(BaseModel):
    id: StrictStr | None = None
    username: StrictStr | None = None
    roles: list[StrictStr] | None = None
    active: StrictBool | None = None
    password: StrictStr | None = None


class UserDelete(BaseModel):
    id: StrictStr | None = None


class UserRead(BaseModel):
    id: str
    username: str
    roles: list[str]
    active: bool

    model_config = ConfigDict(from_attributes=True)


class MessageResponse(BaseModel):
    message: str
