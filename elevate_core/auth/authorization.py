"""Resource authorization checks.

These run after the session guard. Authentication says who is calling;
these checks decide whether that caller may act on a given resource, so a
request can be authenticated and still forbidden.
"""

import logging

from ..exceptions import ForbiddenError

logger = logging.getLogger(__name__)


def is_owner(subject_id, owner_id) -> bool:
    """Compare identifiers as strings, whatever type they arrived as."""
    if subject_id is None or owner_id is None:
        return False
    return str(subject_id) == str(owner_id)


def ensure_owner(
    subject_id,
    owner_id,
    message: str = "You are not authorized to modify this resource.",
) -> None:
    """
    Require the authenticated subject to own the resource.

    Raises:
        ForbiddenError: If the subject is not the recorded owner
    """
    if not is_owner(subject_id, owner_id):
        logger.warning(f"Ownership check failed for user {subject_id}")
        raise ForbiddenError(message)


def ensure_role(role, *allowed: str) -> None:
    """
    Require the authenticated subject to have one of the allowed roles.

    Raises:
        ForbiddenError: If the role is not allowed
    """
    if str(role) not in allowed:
        raise ForbiddenError(
            "Your role is not allowed to perform this action.",
            {"role": str(role), "allowed": list(allowed)}
        )
