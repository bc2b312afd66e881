"""Job application operations.

IMPORT CONVENTION:
- Core accesses these through core.application property

A user may apply to a job once; UNIQUE (job_id, applicant_id) enforces it.
"""

import sqlite3

from ..exceptions import NotFoundError
from ..utils import isodatetime, uid


class ApplicationOperations:
    """Application table operations."""

    def __init__(self, conn: sqlite3.Connection):
        self._conn = conn

    def get_by_id(self, application_id: str) -> sqlite3.Row:
        """Get an application by ID.

        Raises:
            NotFoundError: If application_id doesn't exist
        """
        row = self._conn.execute(
            "SELECT * FROM applications WHERE id = ?",
            (application_id,)
        ).fetchone()

        if row is None:
            raise NotFoundError("Application not found.", {"application_id": application_id})

        return row

    def find(self, job_id: str, applicant_id: str) -> sqlite3.Row | None:
        return self._conn.execute(
            "SELECT * FROM applications WHERE job_id = ? AND applicant_id = ?",
            (job_id, applicant_id)
        ).fetchone()

    def create(self, job_id: str, applicant_id: str) -> str:
        """Insert a pending application and return its ID.

        Raises:
            sqlite3.IntegrityError: If the applicant already applied to the job
        """
        application_id = uid.generate_uuid()
        now = isodatetime.now()

        self._conn.execute(
            """INSERT INTO applications (id, job_id, applicant_id, status, created_at, updated_at)
               VALUES (?, ?, ?, 'pending', ?, ?)""",
            (application_id, job_id, applicant_id, now, now)
        )

        return application_id

    def list_by_applicant(self, applicant_id: str) -> list[sqlite3.Row]:
        return self._conn.execute(
            """SELECT * FROM applications WHERE applicant_id = ?
               ORDER BY created_at DESC, rowid DESC""",
            (applicant_id,)
        ).fetchall()

    def list_by_job(self, job_id: str) -> list[sqlite3.Row]:
        return self._conn.execute(
            """SELECT * FROM applications WHERE job_id = ?
               ORDER BY created_at DESC, rowid DESC""",
            (job_id,)
        ).fetchall()

    def update_status(self, application_id: str, status: str) -> None:
        self._conn.execute(
            "UPDATE applications SET status = ?, updated_at = ? WHERE id = ?",
            (status, isodatetime.now(), application_id)
        )
