"""Service for user registration and authentication."""

from __future__ import annotations

import logging
import re
from typing import Any, Optional, Tuple

from ...domain.errors import AuthenticationError, NotFoundError, ValidationError
from ...domain.models import UserProfile
from ...domain.ports.persistence import UserRepository
from .passwords import MAX_PASSWORD_BYTES, PasswordHasher
from .tokens import INVALID_TOKEN_MESSAGE, TokenSigner

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"

_AGE_PATTERN = re.compile(r"^-?[0-9]{1,4}$")


class AuthService:
    """Registers users, checks credentials and manages session tokens."""

    def __init__(
        self,
        user_repository: UserRepository,
        password_hasher: PasswordHasher,
        token_signer: TokenSigner,
    ) -> None:
        self._users = user_repository
        self._hasher = password_hasher
        self._tokens = token_signer

    def create_user(
        self,
        name: Optional[str],
        email: Optional[str],
        password: Optional[str],
        age: Any,
    ) -> UserProfile:
        """
        Hash the password and store a new user.

        Args:
            name: Display name
            email: E-mail address, compared case-insensitively
            password: Plain text password, at least 6 characters
            age: Age in years (int or numeric string)

        Returns:
            The stored user without its password hash

        Raises:
            ValidationError: If a field is missing or invalid
            ConflictError: If the e-mail is already registered
        """
        _require(name=name, email=email, password=password, age=age)
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
            )
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValidationError(
                f"Password must be at most {MAX_PASSWORD_BYTES} bytes long"
            )
        age_value = _coerce_age(age)

        password_hash = self._hasher.hash(password)
        return self._users.create(
            name=name,
            email=email.strip().lower(),
            password_hash=password_hash,
            age=age_value,
        )

    def register(
        self,
        name: Optional[str],
        email: Optional[str],
        password: Optional[str],
        age: Any,
    ) -> Tuple[UserProfile, str]:
        """Create a user and return it together with a fresh session token."""
        user = self.create_user(name, email, password, age)
        logger.info("Registered user %s", user.id)
        return user, self.issue_token(user)

    def login(self, email: Optional[str], password: Optional[str]) -> Tuple[UserProfile, str]:
        """
        Authenticate a user with email and password.

        Unknown e-mails and wrong passwords fail with the same error after the
        same amount of hashing work.

        Raises:
            ValidationError: If email or password is missing
            AuthenticationError: If the credentials do not match
        """
        _require(email=email, password=password)

        user = self._users.find_by_email(email.strip().lower())
        if user is None:
            self._hasher.burn(password)
            logger.info("Login failed")
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)

        if not self._hasher.verify(password, user.password_hash):
            logger.info("Login failed")
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)

        logger.info("User %s logged in", user.id)
        profile = user.to_profile()
        return profile, self.issue_token(profile)

    def issue_token(self, user: UserProfile) -> str:
        return self._tokens.issue(user.id)

    def validate_token(self, token: str) -> str:
        """Return the user id carried by a valid token."""
        return self._tokens.verify(token)

    def get_profile(self, token: str) -> UserProfile:
        """Resolve a token to the current stored profile of its user."""
        user_id = self.validate_token(token)
        try:
            return self._users.find_by_id(user_id)
        except NotFoundError as exc:
            logger.debug("Token subject %s no longer exists", user_id)
            raise AuthenticationError(INVALID_TOKEN_MESSAGE) from exc


def _require(**fields: Any) -> None:
    missing = [name for name, value in fields.items() if value is None or value == ""]
    if missing:
        labels = ", ".join(missing)
        raise ValidationError(
            f"Missing required fields: {labels}",
            [f"{name.capitalize()} is required" for name in missing],
        )


def _coerce_age(age: Any) -> int:
    if isinstance(age, bool):
        raise ValidationError("Age must be a whole number")
    if isinstance(age, int):
        return age
    if isinstance(age, str) and _AGE_PATTERN.match(age.strip()):
        return int(age.strip())
    raise ValidationError("Age must be a whole number")
