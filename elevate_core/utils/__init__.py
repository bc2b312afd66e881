"""Utility functions for Elevate Core.

This package provides centralized utilities for common operations.
Import convention: use module-level imports for clarity.

    from ..utils import isodatetime, uid, parsing
    timestamp = isodatetime.now()
    user_id = uid.generate_uuid()
    skills = parsing.parse_list("python, flask")
"""

from . import isodatetime, parsing, uid

__all__ = ["isodatetime", "parsing", "uid"]
