"""Pydantic schemas for user API endpoints."""

from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, EmailStr, Field

from ....domain.models import UserProfile


class UserCreateRequest(BaseModel):
    """Request schema for user creation and registration.

    Fields are optional so the service can report every missing one.
    """

    name: Optional[str] = None
    email: Optional[EmailStr] = None
    password: Optional[str] = None
    age: Optional[Union[int, str]] = None


class UserLoginRequest(BaseModel):
    """Request schema for user login."""

    email: Optional[str] = None
    password: Optional[str] = None


class UserResponse(BaseModel):
    """Response schema for user data."""

    id: str
    name: str
    email: str
    age: int
    created_at: datetime = Field(serialization_alias="createdAt")

    @classmethod
    def from_profile(cls, user: UserProfile) -> "UserResponse":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            age=user.age,
            created_at=user.created_at,
        )


class UserEnvelope(BaseModel):
    success: bool = True
    user: UserResponse


class UserCreatedResponse(BaseModel):
    success: bool = True
    message: str
    user: UserResponse


class UserListResponse(BaseModel):
    success: bool = True
    count: int
    users: List[UserResponse]


class UserDeletedResponse(BaseModel):
    success: bool = True
    message: str
    deleted_user: UserResponse = Field(serialization_alias="deletedUser")
