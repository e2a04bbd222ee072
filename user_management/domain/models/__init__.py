"""Domain models for the user management service."""

from .user import User, UserFilter, UserProfile

__all__ = [
    "User",
    "UserFilter",
    "UserProfile",
]
