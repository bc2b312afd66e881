"""Session issuer and user profile service.

Registration and login live here, together with profile reads and updates.
Collaborators (password hasher, token codec, media uploader) are passed in
by the caller; this module does not read settings.

Registration never issues a token: the client logs in separately.
"""

import logging
import sqlite3

from ..db import Core
from ..exceptions import DuplicateError, InvalidCredentialsError
from ..media import CloudinaryUploader, UploadedFile, upload_file, validate_resume
from .password import PasswordHasher
from .schemas import (
    ProfileUpdate,
    SessionResponse,
    UserLogin,
    UserRegister,
    UserResponse,
    normalize_email,
)
from .token import TokenCodec

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Incorrect email, password or role."
DUPLICATE_EMAIL_MESSAGE = "User already exists with this email."


def register_user(
    core: Core,
    data: UserRegister,
    hasher: PasswordHasher,
    uploader: CloudinaryUploader | None = None,
    profile_photo: UploadedFile | None = None,
) -> UserResponse:
    """
    Register a new user.

    The email pre-check gives a fast, friendly error; the UNIQUE constraint
    on users.email is what actually guarantees uniqueness when two
    registrations race.

    Args:
        core: Core used for the write (should be atomic)
        data: Validated registration data (email already normalized)
        hasher: Password hasher
        uploader: Media uploader for the optional profile photo
        profile_photo: Optional profile photo

    Returns:
        Sanitized view of the created user

    Raises:
        DuplicateError: 400 if the email is already registered, 409 if the
            store rejects it after the pre-check passed
        UpstreamDependencyError: If the profile photo upload fails
    """
    email = normalize_email(data.email)

    if core.user.find_by_email(email) is not None:
        raise DuplicateError(DUPLICATE_EMAIL_MESSAGE, {"email": email}, status_code=400)

    photo_url = ""
    if profile_photo is not None:
        photo_url = upload_file(
            uploader, profile_photo, "Failed to upload profile photo."
        ).url

    password_hash = hasher.hash(data.password)

    try:
        user_id = core.user.create(
            name=data.name,
            email=email,
            phone=data.phone,
            password_hash=password_hash,
            role=data.role.value,
            profile_photo=photo_url,
        )
    except sqlite3.IntegrityError as e:
        logger.warning(f"Registration lost a race on email {email}")
        raise DuplicateError(DUPLICATE_EMAIL_MESSAGE, {"email": email}) from e

    logger.info(f"Registered {data.role.value} account {user_id}")
    return UserResponse.from_row(core.user.get_by_id(user_id))


def login_user(
    core: Core,
    data: UserLogin,
    hasher: PasswordHasher,
    codec: TokenCodec,
) -> SessionResponse:
    """
    Verify credentials and issue a session token.

    Unknown email, role mismatch, missing hash and wrong password all raise
    the same InvalidCredentialsError, and all of them pay for one bcrypt
    comparison.

    Returns:
        SessionResponse with the token and the sanitized user

    Raises:
        InvalidCredentialsError: If the credentials don't match
    """
    email = normalize_email(data.email)
    role = data.role.strip()

    row = core.user.find_by_email(email)

    if row is None or row["role"] != role or not row["password_hash"]:
        hasher.burn(data.password)
        logger.warning(f"Failed login for {email}")
        raise InvalidCredentialsError(INVALID_CREDENTIALS_MESSAGE)

    if not hasher.verify(data.password, row["password_hash"]):
        logger.warning(f"Failed login for {email}")
        raise InvalidCredentialsError(INVALID_CREDENTIALS_MESSAGE)

    token = codec.sign(row["id"], row["role"])
    return SessionResponse(token=token, user=UserResponse.from_row(row))


def get_user(core: Core, user_id: str) -> UserResponse:
    """
    Get the sanitized view of a user.

    Raises:
        NotFoundError: If the user doesn't exist
    """
    return UserResponse.from_row(core.user.get_by_id(user_id))


def update_profile(
    core: Core,
    user_id: str,
    data: ProfileUpdate,
    uploader: CloudinaryUploader | None = None,
    resume: UploadedFile | None = None,
    resume_types: list[str] | None = None,
    max_resume_bytes: int = 5 * 1024 * 1024,
) -> UserResponse:
    """
    Apply a partial profile update.

    Only non-empty fields are written. Skills replace the stored list when
    at least one is given. The role and password are never touched here.

    Args:
        core: Core used for the write (should be atomic)
        user_id: Authenticated user ID
        data: Validated update data
        uploader: Media uploader for the optional resume
        resume: Optional resume file
        resume_types: Accepted resume MIME types (None accepts any)
        max_resume_bytes: Maximum resume size

    Returns:
        Sanitized view of the updated user

    Raises:
        NotFoundError: If the user doesn't exist
        DuplicateError: If the new email belongs to another account
        ValidationError: If the resume type or size is not accepted
        UpstreamDependencyError: If the resume upload fails
    """
    row = core.user.get_by_id(user_id)

    changes: dict = {}

    if data.email and data.email != row["email"]:
        if core.user.find_by_email(data.email) is not None:
            raise DuplicateError(
                "Email already in use by another account.",
                {"email": data.email}
            )
        changes["email"] = data.email

    if data.name:
        changes["name"] = data.name
    if data.phone:
        changes["phone"] = data.phone
    if data.bio:
        changes["bio"] = data.bio
    if data.skills:
        changes["skills"] = data.skills

    if resume is not None:
        if resume_types is not None:
            validate_resume(resume, resume_types, max_resume_bytes)
        uploaded = upload_file(
            uploader,
            resume,
            "Failed to upload resume. Try again later.",
            folder="resumes",
            resource_type="auto",
        )
        changes["resume"] = uploaded.url
        changes["resume_original_name"] = uploaded.original_name

    try:
        core.user.update(user_id, changes)
    except sqlite3.IntegrityError as e:
        raise DuplicateError(
            "Email already in use by another account.",
            {"email": data.email}
        ) from e

    return UserResponse.from_row(core.user.get_by_id(user_id))
