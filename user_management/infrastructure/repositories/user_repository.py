"""Repository for User persistence."""

import logging
import re
import sqlite3
import threading
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, List, Optional

from ...domain.errors import ConflictError, NotFoundError, ValidationError
from ...domain.models import User, UserFilter, UserProfile
from ...domain.ports.persistence import UserRepository

logger = logging.getLogger(__name__)

MIN_AGE = 1
MAX_AGE = 120

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _casefold(value: Optional[str]) -> Optional[str]:
    return value.casefold() if value is not None else None


class SQLiteUserRepository(UserRepository):
    """Credential store for User records in SQLite.

    The UNIQUE index on ``email`` is the only uniqueness check: inserts are
    attempted directly and an integrity failure becomes a ConflictError, so
    concurrent registrations of one address cannot both succeed.
    """

    def __init__(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        # SQLite lower() only folds ASCII.
        self._conn.create_function("casefold", 1, _casefold, deterministic=True)
        self._lock = threading.Lock()
        self._initialize_table()

    def _initialize_table(self) -> None:
        """Create users table if it doesn't exist."""
        with self._lock, self._conn:
            self._conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS users (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    email TEXT NOT NULL UNIQUE,
                    password_hash TEXT NOT NULL,
                    age INTEGER NOT NULL CHECK (age BETWEEN 1 AND 120),
                    created_at TEXT NOT NULL
                );

                CREATE INDEX IF NOT EXISTS idx_users_created_at
                    ON users(created_at DESC);
                """
            )

    def close(self) -> None:
        self._conn.close()

    def create(self, name: str, email: str, password_hash: str, age: int) -> UserProfile:
        """Validate and insert a new user.

        Raises:
            ValidationError: If any field is missing or out of range
            ConflictError: If the e-mail is already registered
        """
        self._validate(name, email, password_hash, age)
        user = User(
            id=uuid.uuid4().hex,
            name=name.strip(),
            email=normalize_email(email),
            password_hash=password_hash,
            age=age,
            created_at=datetime.now(timezone.utc),
        )

        try:
            with self._lock, self._conn:
                self._conn.execute(
                    """
                    INSERT INTO users (id, name, email, password_hash, age, created_at)
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (
                        user.id,
                        user.name,
                        user.email,
                        user.password_hash,
                        user.age,
                        user.created_at.isoformat(),
                    ),
                )
        except sqlite3.IntegrityError as exc:
            if "users.email" in str(exc):
                raise ConflictError("User with this email already exists") from exc
            raise

        logger.info("Created user %s", user.id)
        return user.to_profile()

    def find_by_email(self, email: str) -> Optional[User]:
        """Get user by e-mail, including the password hash."""
        with self._lock:
            row = self._conn.execute(
                "SELECT * FROM users WHERE email = ?", (normalize_email(email),)
            ).fetchone()
        return self._row_to_user(row) if row else None

    def find_by_id(self, user_id: str) -> UserProfile:
        """Get user by ID."""
        with self._lock:
            row = self._conn.execute(
                "SELECT * FROM users WHERE id = ?", (user_id,)
            ).fetchone()
        if not row:
            raise NotFoundError("User not found")
        return self._row_to_user(row).to_profile()

    def list(self, user_filter: Optional[UserFilter] = None) -> List[UserProfile]:
        """List users matching the filter, newest first."""
        clauses: List[str] = []
        params: List[Any] = []
        if user_filter:
            if user_filter.name:
                clauses.append("instr(casefold(name), ?) > 0")
                params.append(user_filter.name.casefold())
            if user_filter.email:
                clauses.append("instr(casefold(email), ?) > 0")
                params.append(user_filter.email.casefold())
            if user_filter.min_age is not None:
                clauses.append("age >= ?")
                params.append(user_filter.min_age)
            if user_filter.max_age is not None:
                clauses.append("age <= ?")
                params.append(user_filter.max_age)

        query = "SELECT * FROM users"
        if clauses:
            query += " WHERE " + " AND ".join(clauses)
        query += " ORDER BY created_at DESC, rowid DESC"

        with self._lock:
            rows = self._conn.execute(query, params).fetchall()
        return [self._row_to_user(row).to_profile() for row in rows]

    def delete_by_id(self, user_id: str) -> UserProfile:
        """Delete a user and return the removed record."""
        with self._lock, self._conn:
            row = self._conn.execute(
                "SELECT * FROM users WHERE id = ?", (user_id,)
            ).fetchone()
            if not row:
                raise NotFoundError("User not found")
            self._conn.execute("DELETE FROM users WHERE id = ?", (user_id,))

        logger.info("Deleted user %s", user_id)
        return self._row_to_user(row).to_profile()

    def count(self) -> int:
        with self._lock:
            row = self._conn.execute("SELECT COUNT(*) AS total FROM users").fetchone()
        return int(row["total"])

    @staticmethod
    def _validate(name: str, email: str, password_hash: str, age: int) -> None:
        errors: List[str] = []
        if not isinstance(name, str) or not name.strip():
            errors.append("Name is required")
        if not isinstance(email, str) or not email.strip():
            errors.append("Email is required")
        elif not _EMAIL_PATTERN.match(normalize_email(email)):
            errors.append("Please enter a valid email")
        if not password_hash:
            errors.append("Password is required")
        if isinstance(age, bool) or not isinstance(age, int):
            errors.append("Age must be a whole number")
        elif not MIN_AGE <= age <= MAX_AGE:
            errors.append(f"Age must be between {MIN_AGE} and {MAX_AGE}")
        if errors:
            raise ValidationError("Validation error", errors)

    @staticmethod
    def _row_to_user(row: sqlite3.Row) -> User:
        """Convert database row to User entity."""
        return User(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            password_hash=row["password_hash"],
            age=row["age"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )
