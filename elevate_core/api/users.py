"""User endpoints for Elevate Core.

These endpoints handle accounts and sessions:
- POST  /api/user/register        - Create account (multipart: optional photo in "file")
- POST  /api/user/login           - Verify credentials, set session cookie
- GET   /api/user/logout          - Clear session cookie
- GET   /api/user/me              - Current user
- PATCH /api/user/profile/update  - Update profile (multipart: optional resume in "file")

Registration does not log the user in. Logout only clears the cookie;
session tokens are stateless and are not revoked server-side.
"""

import logging

from flask import Blueprint, g, jsonify, request

from ..auth import service
from ..auth.cookies import clear_session_cookie, set_session_cookie
from ..auth.decorators import auth_required
from ..auth.schemas import ProfileUpdate, UserLogin, UserRegister
from ..config import settings
from ..db import get_core
from ..extensions import get_media_uploader, get_password_hasher, get_token_codec
from ..media import UploadedFile
from .validation import validate_request

logger = logging.getLogger(__name__)

users_bp = Blueprint("users", __name__)


@users_bp.post("/register")
@validate_request
def register(data: UserRegister):
    """
    Create an account.

    Accepts JSON, or multipart form data with an optional profile photo in
    the "file" field.

    Returns:
        201: {"message", "user", "success": true}
        400: Missing field or email already registered
        409: Email registered concurrently
        502: Profile photo upload failed

    Example request:
    ```json
    {
        "name": "Ana",
        "email": "ana@x.com",
        "phone": "1234567890",
        "password": "secret1",
        "role": "seeker"
    }
    ```
    """
    photo = UploadedFile.from_storage(request.files.get("file"))

    with get_core(atomic=True) as core:
        user = service.register_user(
            core,
            data,
            hasher=get_password_hasher(),
            uploader=get_media_uploader(),
            profile_photo=photo,
        )

    return jsonify({
        "message": "Account created successfully.",
        "user": user.model_dump(),
        "success": True,
    }), 201


@users_bp.post("/login")
@validate_request
def login(data: UserLogin):
    """
    Verify credentials and start a session.

    The session token is returned only as an HttpOnly cookie.

    Returns:
        200: {"message", "user", "success": true} + Set-Cookie: token=...
        400: Missing field, or "Incorrect email, password or role."
    """
    core = get_core()
    session = service.login_user(
        core,
        data,
        hasher=get_password_hasher(),
        codec=get_token_codec(),
    )

    logger.info(f"Successful login: {session.user.id}")

    response = jsonify({
        "message": f"Welcome back {session.user.name}".strip(),
        "user": session.user.model_dump(),
        "success": True,
    })
    return set_session_cookie(response, session.token, settings), 200


@users_bp.get("/logout")
def logout():
    """
    End the session on this client by expiring the cookie.

    A copy of the token kept elsewhere stays valid until it expires.
    """
    response = jsonify({"message": "Logged out successfully.", "success": True})
    return clear_session_cookie(response, settings), 200


@users_bp.get("/me")
@auth_required
def me():
    """Current user."""
    user = service.get_user(get_core(), g.user_id)
    return jsonify({"user": user.model_dump(), "success": True}), 200


@users_bp.patch("/profile/update")
@auth_required
@validate_request
def update_profile(data: ProfileUpdate):
    """
    Update the current user's profile.

    Body fields (all optional): name, email, phone, bio, skills (list or
    comma-separated). Multipart requests may carry a resume (PDF, DOC,
    DOCX, up to 5MB) in the "file" field.

    Returns:
        200: {"message", "user", "success": true}
        400: Invalid email or resume
        404: User no longer exists
        409: Email in use by another account
        502: Resume upload failed
    """
    resume = UploadedFile.from_storage(request.files.get("file"))

    with get_core(atomic=True) as core:
        user = service.update_profile(
            core,
            g.user_id,
            data,
            uploader=get_media_uploader(),
            resume=resume,
            resume_types=settings.resume_mime_types,
            max_resume_bytes=settings.max_resume_bytes,
        )

    return jsonify({
        "message": "Profile updated successfully.",
        "user": user.model_dump(),
        "success": True,
    }), 200
