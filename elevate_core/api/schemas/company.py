"""Company schemas."""

from typing import Any

from pydantic import BaseModel, Field, field_validator

from ...auth.schemas.auth import NonBlankStr


class CompanyCreate(BaseModel):
    """Schema for registering a company."""

    company_name: NonBlankStr = Field(..., max_length=200)


class CompanyUpdate(BaseModel):
    """Partial company update. Omitted fields are left alone."""

    name: str | None = None
    description: str | None = None
    website: str | None = None
    location: str | None = None

    @field_validator("name", mode="before")
    @classmethod
    def name_not_blank(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("Company name cannot be blank")
        return v


class CompanyResponse(BaseModel):
    id: str
    name: str
    description: str | None = None
    website: str | None = None
    location: str | None = None
    logo: str | None = None
    user_id: str
    created_at: str
    updated_at: str

    @classmethod
    def from_row(cls, row) -> "CompanyResponse":
        return cls(**{key: row[key] for key in row.keys()})
