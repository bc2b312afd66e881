"""SQL clause builders shared by the operations classes."""

from typing import Any


def build_update_clause(
    data: dict[str, Any],
    exclude: set[str] | None = None
) -> tuple[str, list[Any]]:
    """Build the SET clause of an UPDATE statement.

    Args:
        data: Column names mapped to new values
        exclude: Column names that must never be updated

    Returns:
        (clause, params), e.g. ("name = ?, bio = ?", ["Ana", "Hi"]).
        The clause is empty when nothing is left to update.

    Note:
        Column names come from code, never from request payloads.
    """
    exclude = exclude or set()
    columns = [key for key in data if key not in exclude]
    clause = ", ".join(f"{column} = ?" for column in columns)
    params = [data[column] for column in columns]
    return clause, params
