"""Company operations.

IMPORT CONVENTION:
- Core accesses these through core.company property
"""

import sqlite3
from typing import Any

from . import query
from ..exceptions import NotFoundError
from ..utils import isodatetime, uid


class CompanyOperations:
    """Company table operations."""

    def __init__(self, conn: sqlite3.Connection):
        self._conn = conn

    def find_by_name(self, name: str) -> sqlite3.Row | None:
        return self._conn.execute(
            "SELECT * FROM companies WHERE name = ?",
            (name,)
        ).fetchone()

    def get_by_id(self, company_id: str) -> sqlite3.Row:
        """Get a company by ID.

        Raises:
            NotFoundError: If company_id doesn't exist
        """
        row = self._conn.execute(
            "SELECT * FROM companies WHERE id = ?",
            (company_id,)
        ).fetchone()

        if row is None:
            raise NotFoundError("Company not found.", {"company_id": company_id})

        return row

    def list_by_owner(self, user_id: str) -> list[sqlite3.Row]:
        return self._conn.execute(
            "SELECT * FROM companies WHERE user_id = ? ORDER BY created_at DESC",
            (user_id,)
        ).fetchall()

    def create(self, name: str, user_id: str) -> str:
        """Insert a company owned by user_id and return its ID.

        Raises:
            sqlite3.IntegrityError: If the name is taken
        """
        company_id = uid.generate_uuid()
        now = isodatetime.now()

        self._conn.execute(
            """INSERT INTO companies (id, name, user_id, created_at, updated_at)
               VALUES (?, ?, ?, ?, ?)""",
            (company_id, name, user_id, now, now)
        )

        return company_id

    def update(self, company_id: str, data: dict[str, Any]) -> None:
        """Update company columns with partial data.

        Raises:
            sqlite3.IntegrityError: If a new name collides with another company
        """
        update_clause, params = query.build_update_clause(
            data,
            exclude={"id", "user_id", "created_at", "updated_at"}
        )

        if update_clause:
            params.extend([isodatetime.now(), company_id])
            self._conn.execute(
                f"UPDATE companies SET {update_clause}, updated_at = ? WHERE id = ?",
                params
            )

    def get_many(self, company_ids: list[str]) -> dict[str, sqlite3.Row]:
        """Fetch several companies at once, keyed by ID."""
        if not company_ids:
            return {}
        placeholders = ", ".join("?" for _ in company_ids)
        rows = self._conn.execute(
            f"SELECT * FROM companies WHERE id IN ({placeholders})",
            list(company_ids)
        ).fetchall()
        return {row["id"]: row for row in rows}
