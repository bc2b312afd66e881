"""Job posting operations.

IMPORT CONVENTION:
- Core accesses these through core.job property

Requirements are stored as a JSON array in the requirements column.
Deleting a job cascades to its applications (ON DELETE CASCADE).
"""

import json
import sqlite3

from ..exceptions import NotFoundError
from ..utils import isodatetime, uid


class JobOperations:
    """Job table operations."""

    def __init__(self, conn: sqlite3.Connection):
        self._conn = conn

    def get_by_id(self, job_id: str) -> sqlite3.Row:
        """Get a job by ID.

        Raises:
            NotFoundError: If job_id doesn't exist
        """
        row = self._conn.execute(
            "SELECT * FROM jobs WHERE id = ?",
            (job_id,)
        ).fetchone()

        if row is None:
            raise NotFoundError("Job not found.", {"job_id": job_id})

        return row

    def create(
        self,
        title: str,
        description: str,
        requirements: list[str],
        salary: float,
        location: str,
        job_type: str,
        experience_level: int,
        position: int,
        company_id: str,
        created_by: str
    ) -> str:
        """Insert a job posting and return its ID."""
        job_id = uid.generate_uuid()
        now = isodatetime.now()

        self._conn.execute(
            """INSERT INTO jobs
               (id, title, description, requirements, salary, location, job_type,
                experience_level, position, company_id, created_by, created_at, updated_at)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            (
                job_id, title, description, json.dumps(requirements), salary, location,
                job_type, experience_level, position, company_id, created_by, now, now
            )
        )

        return job_id

    def search(self, keyword: str = "") -> list[sqlite3.Row]:
        """List jobs, newest first.

        Args:
            keyword: Case-insensitive substring matched against title or
                     description. Blank matches everything.
        """
        keyword = keyword.strip()
        if not keyword:
            return self._conn.execute(
                "SELECT * FROM jobs ORDER BY created_at DESC, rowid DESC"
            ).fetchall()

        return self._conn.execute(
            """SELECT * FROM jobs
               WHERE instr(lower(title), lower(?)) > 0
                  OR instr(lower(description), lower(?)) > 0
               ORDER BY created_at DESC, rowid DESC""",
            (keyword, keyword)
        ).fetchall()

    def list_by_creator(self, user_id: str) -> list[sqlite3.Row]:
        return self._conn.execute(
            "SELECT * FROM jobs WHERE created_by = ? ORDER BY created_at DESC, rowid DESC",
            (user_id,)
        ).fetchall()

    def delete(self, job_id: str) -> None:
        """Delete a job and, by cascade, its applications."""
        self._conn.execute("DELETE FROM jobs WHERE id = ?", (job_id,))

    def get_many(self, job_ids: list[str]) -> dict[str, sqlite3.Row]:
        """Fetch several jobs at once, keyed by ID."""
        if not job_ids:
            return {}
        placeholders = ", ".join("?" for _ in job_ids)
        rows = self._conn.execute(
            f"SELECT * FROM jobs WHERE id IN ({placeholders})",
            list(job_ids)
        ).fetchall()
        return {row["id"]: row for row in rows}
