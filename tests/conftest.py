import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Add repository root to sys.path to allow importing 'user_management'
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from user_management.application.services.auth_service import AuthService  # noqa: E402
from user_management.application.services.passwords import PasswordHasher  # noqa: E402
from user_management.application.services.tokens import TokenSigner  # noqa: E402
from user_management.infrastructure.repositories.user_repository import (  # noqa: E402
    SQLiteUserRepository,
)

TEST_SECRET = "test-secret-key-with-enough-length-for-hs256"


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime.now(tz=timezone.utc).replace(microsecond=0))


@pytest.fixture
def repository(tmp_path):
    repo = SQLiteUserRepository(tmp_path / "users.db")
    yield repo
    repo.close()


@pytest.fixture
def hasher() -> PasswordHasher:
    # Minimum bcrypt cost keeps the suite fast.
    return PasswordHasher(rounds=4)


@pytest.fixture
def signer(clock) -> TokenSigner:
    return TokenSigner(TEST_SECRET, ttl=timedelta(hours=24), clock=clock)


@pytest.fixture
def auth_service(repository, hasher, signer) -> AuthService:
    return AuthService(repository, hasher, signer)


@pytest.fixture
def client(tmp_path, monkeypatch):
    from fastapi.testclient import TestClient

    from user_management.core.app_factory import create_application

    monkeypatch.setenv("DATABASE_PATH", str(tmp_path / "api.db"))
    monkeypatch.setenv("JWT_SECRET", TEST_SECRET)
    monkeypatch.setenv("BCRYPT_ROUNDS", "4")
    monkeypatch.delenv("CORS_ALLOW_ORIGINS", raising=False)

    with TestClient(create_application()) as test_client:
        yield test_client
