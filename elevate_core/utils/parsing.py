"""Parsing helpers for loosely-typed form input."""

from typing import Any


def parse_list(value: Any) -> list[str]:
    """Parse a list of strings from a list or a comma-separated string.

    Items are trimmed and blanks dropped. None and empty input give [].

    >>> parse_list("python, flask,, sql ")
    ['python', 'flask', 'sql']
    >>> parse_list([" a ", 1, ""])
    ['a', '1']
    """
    if not value:
        return []

    if isinstance(value, (list, tuple)):
        items = [str(item).strip() for item in value]
    else:
        items = [item.strip() for item in str(value).split(",")]

    return [item for item in items if item]
