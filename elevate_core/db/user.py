"""User operations (the credential store).

IMPORT CONVENTION:
- Core accesses these through core.user property

Rows carry the password hash. Nothing here may be serialized directly;
services convert rows into the sanitized UserResponse view.
"""

import json
import sqlite3
from typing import Any

from . import query
from ..exceptions import NotFoundError
from ..utils import isodatetime, uid


class UserOperations:
    """User table operations."""

    def __init__(self, conn: sqlite3.Connection):
        """Initialize user operations.

        Args:
            conn: SQLite connection with row_factory set to sqlite3.Row
        """
        self._conn = conn

    def find_by_email(self, email: str) -> sqlite3.Row | None:
        """Find a user by (already normalized) email."""
        return self._conn.execute(
            "SELECT * FROM users WHERE email = ?",
            (email,)
        ).fetchone()

    def find_by_id(self, user_id: str) -> sqlite3.Row | None:
        """Find a user by ID."""
        return self._conn.execute(
            "SELECT * FROM users WHERE id = ?",
            (user_id,)
        ).fetchone()

    def get_by_id(self, user_id: str) -> sqlite3.Row:
        """Get a user by ID.

        Raises:
            NotFoundError: If user_id doesn't exist
        """
        row = self.find_by_id(user_id)
        if row is None:
            raise NotFoundError("User not found.", {"user_id": user_id})
        return row

    def create(
        self,
        name: str,
        email: str,
        phone: str,
        password_hash: str,
        role: str,
        profile_photo: str = ""
    ) -> str:
        """Insert a user and return the generated ID.

        Raises:
            sqlite3.IntegrityError: If the email is already registered
        """
        user_id = uid.generate_uuid()
        now = isodatetime.now()

        self._conn.execute(
            """INSERT INTO users
               (id, name, email, phone, password_hash, role, profile_photo, created_at, updated_at)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            (user_id, name, email, phone, password_hash, role, profile_photo, now, now)
        )

        return user_id

    def update(self, user_id: str, data: dict[str, Any]) -> None:
        """Update user columns with partial data.

        Args:
            user_id: The UUID of the user to update
            data: Column names mapped to new values. ``skills`` may be a list.

        Note:
            'id', 'role' and 'password_hash' are never updated here.

        Raises:
            sqlite3.IntegrityError: If a new email collides with another user
        """
        if "skills" in data and isinstance(data["skills"], list):
            data = {**data, "skills": json.dumps(data["skills"])}

        update_clause, params = query.build_update_clause(
            data,
            exclude={"id", "role", "password_hash", "created_at", "updated_at"}
        )

        if update_clause:
            params.extend([isodatetime.now(), user_id])
            self._conn.execute(
                f"UPDATE users SET {update_clause}, updated_at = ? WHERE id = ?",
                params
            )

    def get_many(self, user_ids: list[str]) -> dict[str, sqlite3.Row]:
        """Fetch several users at once, keyed by ID."""
        if not user_ids:
            return {}
        placeholders = ", ".join("?" for _ in user_ids)
        rows = self._conn.execute(
            f"SELECT * FROM users WHERE id IN ({placeholders})",
            list(user_ids)
        ).fetchall()
        return {row["id"]: row for row in rows}
