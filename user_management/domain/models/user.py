"""User domain model for account registration and lookup."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional


class User:
    """
    Stored identity record.

    Attributes:
        id: Opaque identifier assigned by the store
        name: Display name
        email: Login e-mail address (lowercase, unique)
        password_hash: bcrypt hash of the password
        age: Age in years, between 1 and 120
        created_at: Account creation timestamp (UTC)
    """

    def __init__(
        self,
        id: str,
        name: str,
        email: str,
        password_hash: str,
        age: int,
        created_at: datetime,
    ):
        self.id = id
        self.name = name
        self.email = email
        self.password_hash = password_hash
        self.age = age
        self.created_at = created_at

    def to_profile(self) -> "UserProfile":
        """Return the record without its password hash."""
        return UserProfile(
            id=self.id,
            name=self.name,
            email=self.email,
            age=self.age,
            created_at=self.created_at,
        )

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email}>"


@dataclass(frozen=True)
class UserProfile:
    """Public projection of a user; the only shape that leaves the store."""

    id: str
    name: str
    email: str
    age: int
    created_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "age": self.age,
            "created_at": self.created_at.replace(microsecond=0).isoformat(),
        }


@dataclass(frozen=True)
class UserFilter:
    """Optional criteria for listing users."""

    name: Optional[str] = None
    email: Optional[str] = None
    min_age: Optional[int] = None
    max_age: Optional[int] = None
