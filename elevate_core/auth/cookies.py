"""Session cookie helpers.

Login sets the ``token`` cookie for the token's lifetime; logout overwrites
it with an empty value that expires immediately. Secure/SameSite come from
settings, which refuse SameSite=None without Secure.
"""

from flask import Response


def _cookie_options(settings) -> dict:
    return {
        "httponly": True,
        "secure": settings.session_cookie_secure,
        "samesite": settings.session_cookie_samesite,
        "path": "/",
    }


def set_session_cookie(response: Response, token: str, settings) -> Response:
    """Attach the session token cookie (Max-Age = token lifetime)."""
    response.set_cookie(
        settings.cookie_name,
        token,
        max_age=settings.jwt_expiry_hours * 60 * 60,
        **_cookie_options(settings)
    )
    return response


def clear_session_cookie(response: Response, settings) -> Response:
    """Expire the session cookie (Max-Age=0, Expires at the epoch)."""
    response.set_cookie(
        settings.cookie_name,
        "",
        max_age=0,
        expires=0,
        **_cookie_options(settings)
    )
    return response
