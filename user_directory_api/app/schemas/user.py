"""
Pydantic models for user data.

Defines schemas for creating, updating and reading users.  Timestamps
are exchanged as integer UNIX epoch seconds in both directions; ids are
exchanged as canonical UUID strings.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_serializer


class UserCreate(BaseModel):
    """Schema for registering a user.

    Both fields are required.  Emptiness and the email shape are checked
    by ``UserService`` so that every rule violation is reported in the
    same way.
    """

    name: str = Field(..., examples=["John Doe"])
    email: str = Field(..., examples=["john@example.com"])


class UserUpdate(BaseModel):
    """Schema for updating a user.

    All fields are optional; only provided fields will be updated.
    """

    name: Optional[str] = Field(None, examples=["Jane Doe"])
    email: Optional[str] = Field(None, examples=["jane@example.com"])


class UserRead(BaseModel):
    """Schema for reading a user from the API."""

    id: UUID
    name: str
    email: str
    created_at: datetime = Field(..., description="UNIX timestamp (seconds)")
    updated_at: datetime = Field(..., description="UNIX timestamp (seconds)")

    # Build directly from the storage dataclass.
    model_config = {
        "from_attributes": True,
    }

    @field_serializer("created_at", "updated_at")
    def _serialize_timestamp(self, value: datetime) -> int:
        return int(value.timestamp())


class UserResponse(BaseModel):
    user: UserRead


class UsersResponse(BaseModel):
    users: List[UserRead]
    count: int
