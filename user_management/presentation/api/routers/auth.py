"""API router for registration, login and the caller's profile."""

from fastapi import APIRouter, Depends, status

from ....application.services.auth_service import AuthService
from ....core.dependencies import get_auth_service
from ....domain.models import UserProfile
from ...api.dependencies import require_current_user
from ...api.schemas.auth import AuthResponse
from ...api.schemas.user_schemas import (
    UserCreateRequest,
    UserEnvelope,
    UserLoginRequest,
    UserResponse,
)

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


# Sync handlers: FastAPI runs them in its threadpool, keeping bcrypt off the event loop.
@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    payload: UserCreateRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    user, token = auth_service.register(
        name=payload.name,
        email=payload.email,
        password=payload.password,
        age=payload.age,
    )
    return AuthResponse(
        message="User registered successfully",
        user=UserResponse.from_profile(user),
        token=token,
    )


@router.post("/login", response_model=AuthResponse)
def login(
    payload: UserLoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    user, token = auth_service.login(payload.email, payload.password)
    return AuthResponse(
        message="Login successful",
        user=UserResponse.from_profile(user),
        token=token,
    )


@router.get("/profile", response_model=UserEnvelope)
def profile(current_user: UserProfile = Depends(require_current_user)) -> UserEnvelope:
    return UserEnvelope(user=UserResponse.from_profile(current_user))
