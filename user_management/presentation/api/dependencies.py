from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ...application.services.auth_service import AuthService
from ...core.dependencies import get_auth_service
from ...domain.errors import AuthenticationError
from ...domain.models import UserProfile

_bearer_scheme = HTTPBearer(auto_error=False)


def require_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(_bearer_scheme),
    auth_service: AuthService = Depends(get_auth_service),
) -> UserProfile:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise AuthenticationError("Access token required")
    return auth_service.get_profile(credentials.credentials)
