"""Tests for company, job and application schemas."""

import pytest
from pydantic import ValidationError

from elevate_core.api.schemas import (
    ApplicationStatus,
    CompanyCreate,
    CompanyUpdate,
    JobCreate,
    JobResponse,
    StatusUpdate,
)


def job_data(**overrides):
    data = {
        "title": "Dev",
        "description": "Code",
        "requirements": "python, sql",
        "salary": "1000",
        "location": "Remote",
        "job_type": "Full-time",
        "experience": "2",
        "position": "1",
        "company_id": "c1",
    }
    data.update(overrides)
    return data


class TestJobCreate:

    def test_form_strings_coerced(self):
        job = JobCreate(**job_data())
        assert job.salary == 1000.0
        assert job.experience == 2
        assert job.requirements == ["python", "sql"]

    @pytest.mark.parametrize("field, value", [
        ("salary", 0),
        ("salary", -5),
        ("position", 0),
        ("experience", -1),
        ("requirements", ""),
        ("requirements", " , "),
        ("title", "  "),
    ])
    def test_rejected(self, field, value):
        with pytest.raises(ValidationError):
            JobCreate(**job_data(**{field: value}))


class TestJobResponse:

    def test_from_row_decodes_requirements(self):
        row = {
            "id": "j1", "title": "Dev", "description": "Code", "requirements": '["python"]',
            "salary": 10.0, "location": "Remote", "job_type": "Full-time",
            "experience_level": 1, "position": 1, "company_id": "c1", "created_by": "u1",
            "created_at": "2025-10-18T10:00:00Z", "updated_at": "2025-10-18T10:00:00Z",
        }

        job = JobResponse.from_row(row, applications=["a1"])
        assert job.requirements == ["python"]
        assert job.applications == ["a1"]
        assert job.company is None


class TestCompanySchemas:

    def test_create_requires_name(self):
        with pytest.raises(ValidationError):
            CompanyCreate(company_name=" ")

    def test_update_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            CompanyUpdate(name="")

    def test_update_unset_fields_excluded(self):
        assert CompanyUpdate(location="Lisbon").model_dump(exclude_unset=True) == {"location": "Lisbon"}


class TestStatusUpdate:

    @pytest.mark.parametrize("value", ["accepted", "Accepted", " REJECTED ", "pending"])
    def test_case_insensitive(self, value):
        assert StatusUpdate(status=value).status in set(ApplicationStatus)

    def test_unknown(self):
        with pytest.raises(ValidationError):
            StatusUpdate(status="hired")
