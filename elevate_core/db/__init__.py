"""Database module for Elevate Core.

This module provides the Core API for database operations.
Core encapsulates connection management and provides access to the
per-table operations classes.

ARCHITECTURE:
- Core owns its connection (no Flask g.db dependency)
- Connection closes on context exit (atomic=True) or when Core is collected
- Each table gets an encapsulated class with related operations

    core = get_core()
    user = core.user.get_by_email("ana@x.com")

    with get_core(atomic=True) as core:
        company_id = core.company.create(name="Acme", user_id=user["id"])
        core.job.create(company_id=company_id, ...)

UNIQUENESS:
Uniqueness (user email, company name, one application per job and
applicant) is enforced by UNIQUE constraints. Operations let
sqlite3.IntegrityError propagate; services translate it into DuplicateError.

ID GENERATION POLICY:
All row IDs are auto-generated UUID v4 strings. Callers never pass IDs to
create().
"""

from pathlib import Path
from typing import TYPE_CHECKING
import sqlite3
from ..config import settings


if TYPE_CHECKING:
    from .application import ApplicationOperations
    from .company import CompanyOperations
    from .job import JobOperations
    from .user import UserOperations


class Core:
    """
    Database Core with table operations.

    Maintains its own connection and transaction state.
    Provides access to table operations through properties.

    Connection Lifecycle:
    - atomic=True: Connection commits or rolls back, then closes, on __exit__
    - atomic=False: Reads only; connection closes when Core is collected
    """

    def __init__(self, connection: sqlite3.Connection, atomic: bool = False):
        """Initialize Core with a database connection.

        Args:
            connection: SQLite connection with row_factory set to sqlite3.Row
            atomic: If True, Core MUST be used as context manager.
        """
        self._conn = connection
        self._atomic = atomic
        self._user_ops = None
        self._company_ops = None
        self._job_ops = None
        self._application_ops = None

    @property
    def user(self) -> "UserOperations":
        """User (credential store) operations.

        Lazy-loaded to avoid circular import issues.
        Operations are created on first access and cached.
        """
        if self._user_ops is None:
            from .user import UserOperations
            self._user_ops = UserOperations(self._conn)
        return self._user_ops

    @property
    def company(self) -> "CompanyOperations":
        """Company operations."""
        if self._company_ops is None:
            from .company import CompanyOperations
            self._company_ops = CompanyOperations(self._conn)
        return self._company_ops

    @property
    def job(self) -> "JobOperations":
        """Job posting operations."""
        if self._job_ops is None:
            from .job import JobOperations
            self._job_ops = JobOperations(self._conn)
        return self._job_ops

    @property
    def application(self) -> "ApplicationOperations":
        """Job application operations."""
        if self._application_ops is None:
            from .application import ApplicationOperations
            self._application_ops = ApplicationOperations(self._conn)
        return self._application_ops

    def __enter__(self) -> "Core":
        """Enter context manager for atomic transaction.

        Raises:
            RuntimeError: If Core was not created with atomic=True

        Returns:
            self for use in with-statement
        """
        if not self._atomic:
            raise RuntimeError(
                "Core must be created with atomic=True for context manager use. "
                "Use: with db.get_core(atomic=True) as core:"
            )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit context manager, committing or rolling back transaction."""
        try:
            if exc_type is None:
                self._conn.commit()
            else:
                self._conn.rollback()
        finally:
            self._conn.close()

    def __del__(self):
        """Close the connection if it is still open.

        Called during garbage collection, when the connection may already be
        closed or unusable.
        """
        if hasattr(self, "_conn") and self._conn:
            try:
                self._conn.close()
            except sqlite3.Error:
                pass


def _create_connection() -> sqlite3.Connection:
    """Create a fresh database connection.

    Returns:
        SQLite connection with row_factory set to sqlite3.Row
        and foreign keys enabled.
    """
    db_path = Path(settings.database_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def get_core(atomic: bool = False) -> Core:
    """
    Get a database Core instance.

    Args:
        atomic: If True, returns a Core that MUST be used as context manager.
                All writes inside the block commit together on exit, or roll
                back if the block raises.
                If False (default), returns a Core for reads.

    Returns:
        Core instance with user/company/job/application operations

    Examples:
        Read:
        >>> core = get_core()
        >>> job = core.job.get_by_id(job_id)

        Atomic write:
        >>> with get_core(atomic=True) as core:
        ...     core.job.delete(job_id)
    """
    conn = _create_connection()
    return Core(conn, atomic=atomic)


# ============================================================================
# DATABASE INITIALIZATION
# ============================================================================

SCHEMA_PATH = Path(__file__).parent.parent / "schema" / "schema.sql"


def init_db():
    """Initialize database by running schema.sql if not already initialized."""
    db_path = Path(settings.database_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    with sqlite3.connect(str(db_path)) as db:
        cursor = db.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name='_schema_metadata'"
        )
        if cursor.fetchone():
            # Database already initialized, skip
            return

        db.executescript(SCHEMA_PATH.read_text())
        db.commit()


def get_schema_version() -> str:
    """Get current schema version from the _schema_metadata table."""
    core = get_core()
    row = core._conn.execute(
        "SELECT value FROM _schema_metadata WHERE key = 'version'"
    ).fetchone()
    return row[0] if row else "unknown"
