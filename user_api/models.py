from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    """A stored user record. The id is always assigned by the store."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., ge=1)
    name: str
    email: str


class UserPayload(BaseModel):
    # Clients may echo an "id" back; it is ignored like any other unknown field.
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = Field(default=None, description="Display name of the user")
    email: Optional[str] = Field(default=None, description="Email address of the user")


class ErrorResponse(BaseModel):
    error: str
