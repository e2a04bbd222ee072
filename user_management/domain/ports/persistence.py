from __future__ import annotations

from typing import List, Optional, Protocol

from ..models import User, UserFilter, UserProfile


class UserRepository(Protocol):
    """Abstract storage for user identity records.

    Implementations own e-mail uniqueness and field validation.
    """

    def create(self, name: str, email: str, password_hash: str, age: int) -> UserProfile:
        ...

    def find_by_email(self, email: str) -> Optional[User]:
        ...

    def find_by_id(self, user_id: str) -> UserProfile:
        ...

    def list(self, user_filter: Optional[UserFilter] = None) -> List[UserProfile]:
        ...

    def delete_by_id(self, user_id: str) -> UserProfile:
        ...

    def count(self) -> int:
        ...

    def close(self) -> None:
        ...
