"""Authentication Pydantic schemas for API validation."""

from .auth import (
    ProfileUpdate,
    Role,
    SessionResponse,
    TokenPayload,
    UserLogin,
    UserProfile,
    UserRegister,
    UserResponse,
    normalize_email,
)

__all__ = [
    "ProfileUpdate",
    "Role",
    "SessionResponse",
    "TokenPayload",
    "UserLogin",
    "UserProfile",
    "UserRegister",
    "UserResponse",
    "normalize_email",
]
