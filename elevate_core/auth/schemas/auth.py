"""Pydantic schemas for registration, login and the sanitized user view."""

import json
from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator

from ...utils import parsing

NonBlankStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class Role(str, Enum):
    """Closed set of principal roles. Fixed at registration."""

    SEEKER = "seeker"
    RECRUITER = "recruiter"


def normalize_email(email: str) -> str:
    """Trim and lowercase an email address."""
    return str(email).strip().lower()


def _validate_email(value: str) -> str:
    value = normalize_email(value)
    if "@" not in value or value.startswith("@") or value.endswith("@"):
        raise ValueError("Invalid email address")
    return value


# ============================================================================
# Request Schemas
# ============================================================================


class UserRegister(BaseModel):
    """Schema for account registration."""

    name: NonBlankStr = Field(..., max_length=100, description="Display name")
    email: NonBlankStr = Field(..., description="Email address (normalized to lowercase)")
    phone: NonBlankStr = Field(..., max_length=20, description="Phone number")
    password: str = Field(..., min_length=6, max_length=72, description="Plaintext password")
    role: Role = Field(..., description="seeker or recruiter")

    @field_validator("email")
    @classmethod
    def email_normalized(cls, v: str) -> str:
        return _validate_email(v)


class UserLogin(BaseModel):
    """Schema for login.

    Role is a plain string here: an unknown role must fail like any other
    credential mismatch, not as a validation error.
    """

    email: NonBlankStr
    password: str = Field(..., min_length=1)
    role: NonBlankStr

    @field_validator("email")
    @classmethod
    def email_normalized(cls, v: str) -> str:
        return normalize_email(v)


class ProfileUpdate(BaseModel):
    """Schema for partial profile updates. Blank values are ignored."""

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    bio: str | None = None
    skills: list[str] = Field(default_factory=list)

    @field_validator("name", "phone", "bio", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
        return v or None

    @field_validator("email", mode="before")
    @classmethod
    def email_normalized(cls, v: Any) -> Any:
        if v is None or v == "":
            return None
        if not isinstance(v, str):
            raise ValueError("Invalid email.")
        return _validate_email(v)

    @field_validator("skills", mode="before")
    @classmethod
    def skills_parsed(cls, v: Any) -> list[str]:
        return parsing.parse_list(v)


# ============================================================================
# Response Schemas
# ============================================================================


class UserProfile(BaseModel):
    """Profile section of a user."""

    bio: str | None = None
    skills: list[str] = Field(default_factory=list)
    resume: str | None = None
    resume_original_name: str | None = None
    profile_photo: str = ""


class UserResponse(BaseModel):
    """Sanitized user view. Never carries the password hash."""

    model_config = ConfigDict(use_enum_values=True)

    id: str
    name: str
    email: str
    phone: str
    role: Role
    profile: UserProfile = Field(default_factory=UserProfile)
    created_at: str

    @classmethod
    def from_row(cls, row) -> "UserResponse":
        """Build the sanitized view from a users row."""
        return cls(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            phone=row["phone"],
            role=row["role"],
            profile=UserProfile(
                bio=row["bio"],
                skills=json.loads(row["skills"] or "[]"),
                resume=row["resume"],
                resume_original_name=row["resume_original_name"],
                profile_photo=row["profile_photo"] or "",
            ),
            created_at=row["created_at"],
        )


class TokenPayload(BaseModel):
    """Decoded session token claims."""

    sub: str = Field(..., description="User ID")
    role: str
    iat: int
    exp: int


class SessionResponse(BaseModel):
    """Result of a successful login: the token and the sanitized user."""

    token: str
    user: UserResponse
