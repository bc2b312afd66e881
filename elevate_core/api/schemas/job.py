"""Job posting schemas."""

import json
from typing import Any

from pydantic import BaseModel, Field, field_validator

from ...auth.schemas.auth import NonBlankStr
from ...utils import parsing
from .company import CompanyResponse


class JobCreate(BaseModel):
    """Schema for posting a job. Every field is required."""

    title: NonBlankStr = Field(..., max_length=200)
    description: NonBlankStr
    requirements: list[str] = Field(..., min_length=1)
    salary: float = Field(..., gt=0, description="Positive number")
    location: NonBlankStr
    job_type: NonBlankStr
    experience: int = Field(..., ge=0, description="Required experience level in years")
    position: int = Field(..., gt=0, description="Number of open positions")
    company_id: NonBlankStr

    @field_validator("requirements", mode="before")
    @classmethod
    def requirements_parsed(cls, v: Any) -> Any:
        if v is None:
            return v
        return parsing.parse_list(v)


class JobResponse(BaseModel):
    id: str
    title: str
    description: str
    requirements: list[str]
    salary: float
    location: str
    job_type: str
    experience_level: int
    position: int
    company_id: str
    created_by: str
    created_at: str
    updated_at: str
    company: CompanyResponse | None = None
    applications: list[str] = Field(default_factory=list)

    @classmethod
    def from_row(
        cls,
        row,
        company: CompanyResponse | None = None,
        applications: list[str] | None = None
    ) -> "JobResponse":
        data = {key: row[key] for key in row.keys()}
        data["requirements"] = json.loads(data["requirements"] or "[]")
        return cls(**data, company=company, applications=applications or [])
