"""Job application schemas."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from ...auth.schemas import UserResponse
from .job import JobResponse


class ApplicationStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class StatusUpdate(BaseModel):
    """Schema for changing an application's status. Case-insensitive."""

    status: ApplicationStatus

    @field_validator("status", mode="before")
    @classmethod
    def status_lowercased(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lower()
        return v


class ApplicationResponse(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    id: str
    job_id: str
    applicant_id: str
    status: ApplicationStatus
    created_at: str
    updated_at: str
    job: JobResponse | None = None
    applicant: UserResponse | None = None

    @classmethod
    def from_row(
        cls,
        row,
        job: JobResponse | None = None,
        applicant: UserResponse | None = None
    ) -> "ApplicationResponse":
        data = {key: row[key] for key in row.keys()}
        return cls(**data, job=job, applicant=applicant)


class ApplicantsResponse(BaseModel):
    """A job together with its applications and applicants."""

    job: JobResponse
    applications: list[ApplicationResponse]
