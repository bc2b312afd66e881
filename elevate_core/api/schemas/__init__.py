"""Pydantic schemas for API validation.

Company, job and application schemas are defined here.
Auth schemas are imported from the auth module for use in API endpoints.
"""

# Re-export auth schemas for convenience in API endpoints
from elevate_core.auth.schemas import (
    ProfileUpdate,
    UserLogin,
    UserRegister,
    UserResponse,
)

from .application import (
    ApplicantsResponse,
    ApplicationResponse,
    ApplicationStatus,
    StatusUpdate,
)
from .company import CompanyCreate, CompanyResponse, CompanyUpdate
from .job import JobCreate, JobResponse

__all__ = [
    "CompanyCreate",
    "CompanyUpdate",
    "CompanyResponse",
    "JobCreate",
    "JobResponse",
    "ApplicationStatus",
    "StatusUpdate",
    "ApplicationResponse",
    "ApplicantsResponse",
    # Auth schemas (re-exported from elevate_core.auth.schemas)
    "UserRegister",
    "UserLogin",
    "ProfileUpdate",
    "UserResponse",
]
