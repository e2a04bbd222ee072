from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from ....application.services.auth_service import AuthService
from ....core.dependencies import get_auth_service, get_user_repository
from ....domain.models import UserFilter
from ....domain.ports.persistence import UserRepository
from ...api.schemas.user_schemas import (
    UserCreatedResponse,
    UserCreateRequest,
    UserDeletedResponse,
    UserEnvelope,
    UserListResponse,
    UserResponse,
)

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.get("", response_model=UserListResponse)
def list_users(
    name: Optional[str] = None,
    email: Optional[str] = None,
    min_age: Optional[int] = Query(default=None, alias="minAge"),
    max_age: Optional[int] = Query(default=None, alias="maxAge"),
    users: UserRepository = Depends(get_user_repository),
) -> UserListResponse:
    matches = users.list(
        UserFilter(name=name or None, email=email or None, min_age=min_age, max_age=max_age)
    )
    return UserListResponse(
        count=len(matches),
        users=[UserResponse.from_profile(user) for user in matches],
    )


@router.get("/{user_id}", response_model=UserEnvelope)
def get_user(
    user_id: str,
    users: UserRepository = Depends(get_user_repository),
) -> UserEnvelope:
    return UserEnvelope(user=UserResponse.from_profile(users.find_by_id(user_id)))


@router.delete("/{user_id}", response_model=UserDeletedResponse)
def delete_user(
    user_id: str,
    users: UserRepository = Depends(get_user_repository),
) -> UserDeletedResponse:
    deleted = users.delete_by_id(user_id)
    return UserDeletedResponse(
        message="User deleted successfully",
        deleted_user=UserResponse.from_profile(deleted),
    )


@router.post("", response_model=UserCreatedResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    payload: UserCreateRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> UserCreatedResponse:
    user = auth_service.create_user(
        name=payload.name,
        email=payload.email,
        password=payload.password,
        age=payload.age,
    )
    return UserCreatedResponse(
        message="User created successfully",
        user=UserResponse.from_profile(user),
    )
