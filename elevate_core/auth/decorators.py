"""Session guard and authorization decorators for protected endpoints.

This module provides:
- authenticate_request() - The session guard; blueprints call it from before_request
- @auth_required - Requires a valid session cookie
- @role_required - Requires a valid session cookie and one of the given roles

The session token travels in the ``token`` cookie (name configurable).
"""

import logging
from functools import wraps

import jwt
from flask import g, request

from ..config import settings
from ..exceptions import InvalidTokenError, UnauthenticatedError
from ..extensions import get_token_codec
from .authorization import ensure_role

logger = logging.getLogger(__name__)


# ============================================================================
# Session Guard
# ============================================================================


def authenticate_request():
    """
    Verify the session cookie and record the caller in flask.g.

    On success stores:
    - g.user_id: User ID (UUID)
    - g.role: Role carried by the token

    Nothing is written to flask.g unless verification succeeds.

    Raises:
        UnauthenticatedError: If no session cookie is present
        InvalidTokenError: If the token is expired, forged, malformed or
            missing claims
    """
    token_str = request.cookies.get(settings.cookie_name, "")
    if not token_str:
        logger.warning(f"Unauthenticated request to {request.path}")
        raise UnauthenticatedError("User not authenticated")

    try:
        payload = get_token_codec().verify(token_str)
    except jwt.ExpiredSignatureError as e:
        logger.warning("Session token expired")
        raise InvalidTokenError("Token has expired", {"code": "token_expired"}) from e
    except jwt.InvalidTokenError as e:
        logger.warning(f"Invalid session token: {e}")
        raise InvalidTokenError("Invalid token", {"code": "invalid_token"}) from e

    g.user_id = payload.sub
    g.role = payload.role
    logger.debug(f"Authenticated user {g.user_id}")


# ============================================================================
# Decorators
# ============================================================================


def auth_required(f):
    """
    Decorator to require a valid session for endpoint access.

    Example:
    ```python
    @users_bp.get("/me")
    @auth_required
    def me():
        user_id = g.user_id
        ...
    ```
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        authenticate_request()
        return f(*args, **kwargs)

    return wrapper


def role_required(*roles: str):
    """
    Decorator to require a valid session with one of the given roles.

    Authenticates the request first if an earlier hook hasn't already.

    Raises:
        ForbiddenError: If the authenticated role is not in roles

    Example:
    ```python
    @jobs_bp.post("/post")
    @role_required("recruiter")
    def post_job():
        ...
    ```
    """
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            if getattr(g, "user_id", None) is None:
                authenticate_request()
            ensure_role(g.role, *roles)
            return f(*args, **kwargs)

        return wrapper

    return decorator
