from pydantic import BaseModel

from .user_schemas import UserResponse


class AuthResponse(BaseModel):
    success: bool = True
    message: str
    user: UserResponse
    token: str
    token_type: str = "bearer"
