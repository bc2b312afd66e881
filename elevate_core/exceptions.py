"""Custom exceptions for Elevate Core.

Every error raised by services and endpoints derives from ElevateError and
declares the HTTP status it maps to. main.py translates them once, at the
boundary, into ``{"success": false, "message": ...}``.
"""


class ElevateError(Exception):
    """Base exception for all Elevate errors."""

    status_code = 500

    def __init__(self, message: str, details: dict | None = None, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        if status_code is not None:
            self.status_code = status_code


class ValidationError(ElevateError):
    """Missing or malformed input."""

    status_code = 400


class InvalidCredentialsError(ElevateError):
    """Login failed. The message is the same whatever part of the tuple was wrong."""

    status_code = 400


class DuplicateError(ElevateError):
    """A unique resource already exists.

    409 when the store rejects the write; pre-checks raise it with 400.
    """

    status_code = 409


class UnauthenticatedError(ElevateError):
    """No usable session token on a protected request."""

    status_code = 401


class InvalidTokenError(UnauthenticatedError):
    """Session token failed signature, expiry or claim verification."""


class ForbiddenError(ElevateError):
    """Authenticated, but not allowed to act on the resource."""

    status_code = 403


class NotFoundError(ElevateError):
    """Requested resource does not exist."""

    status_code = 404


class UpstreamDependencyError(ElevateError):
    """An external service (the media host) failed."""

    status_code = 502


class DatabaseError(ElevateError):
    """Database operation failed."""

    status_code = 500
