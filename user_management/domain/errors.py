"""Typed failures raised by the identity core."""

from typing import List, Optional


class UserManagementError(Exception):
    """Base class for every failure the core raises on purpose."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(UserManagementError):
    """Missing, malformed or out-of-range input."""

    def __init__(self, message: str, errors: Optional[List[str]] = None) -> None:
        super().__init__(message)
        self.errors = list(errors) if errors else [message]


class ConflictError(UserManagementError):
    """A record with the same e-mail already exists."""


class AuthenticationError(UserManagementError):
    """Invalid credentials or an invalid/expired token.

    The message never says which check failed.
    """


class NotFoundError(UserManagementError):
    """No record matches the given identifier."""
