"""JWT session token signing and verification.

Tokens are stateless HS256 JWTs carrying only the user id (``sub``), the
issue time and the expiry time. There is no server-side session table, so a
token stays valid until it expires.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable

import jwt

from ...domain.errors import AuthenticationError

logger = logging.getLogger(__name__)

DEFAULT_SECRET = "change-me"
INVALID_TOKEN_MESSAGE = "Invalid or expired token"

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


class TokenSigner:
    """Issues and validates session tokens with one process-wide secret."""

    def __init__(
        self,
        secret_key: str,
        ttl: timedelta = timedelta(hours=24),
        algorithm: str = "HS256",
        clock: Clock = utc_now,
    ) -> None:
        if not secret_key:
            raise RuntimeError("JWT_SECRET is not configured.")
        if secret_key == DEFAULT_SECRET:
            logger.warning(
                "JWT_SECRET is using the default value. Configure a strong secret in production."
            )
        self._secret_key = secret_key
        self._ttl = ttl
        self._algorithm = algorithm
        self._clock = clock

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def issue(self, subject: str) -> str:
        now = self._clock()
        payload = {
            "sub": str(subject),
            "iat": int(now.timestamp()),
            "exp": int((now + self._ttl).timestamp()),
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str) -> str:
        """Return the subject of a valid token.

        Raises:
            AuthenticationError: For malformed, tampered or expired tokens
        """
        if not token:
            logger.debug("Token rejected: empty")
            raise AuthenticationError(INVALID_TOKEN_MESSAGE)
        try:
            # Time claims are checked below against the injected clock.
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={
                    "require": ["sub", "iat", "exp"],
                    "verify_exp": False,
                    "verify_iat": False,
                },
            )
        except jwt.InvalidTokenError as exc:
            logger.debug("Token rejected: %s", type(exc).__name__)
            raise AuthenticationError(INVALID_TOKEN_MESSAGE) from exc

        subject = payload.get("sub")
        expires_at = payload.get("exp")
        if not isinstance(subject, str) or not subject or not isinstance(expires_at, (int, float)):
            logger.debug("Token rejected: malformed claims")
            raise AuthenticationError(INVALID_TOKEN_MESSAGE)
        if self._clock().timestamp() >= expires_at:
            logger.debug("Token rejected: expired")
            raise AuthenticationError(INVALID_TOKEN_MESSAGE)
        return subject
