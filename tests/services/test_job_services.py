"""Tests for the company, job and application services.

HTTP behaviour is covered by the endpoint tests; these exercise the
services directly against a Core.
"""

import sqlite3

import pytest

from conftest import FakeUploader, create_user
from elevate_core.api.schemas import CompanyCreate, CompanyUpdate, JobCreate, StatusUpdate
from elevate_core.exceptions import (
    DuplicateError,
    ForbiddenError,
    NotFoundError,
    UpstreamDependencyError,
)
from elevate_core.media import UploadedFile
from elevate_core.services import applications, companies, jobs


@pytest.fixture
def rita(core, hasher):
    return create_user(core, hasher, name="Rita", email="rita@acme.com", role="recruiter")


@pytest.fixture
def bo(core, hasher):
    return create_user(core, hasher, name="Bo", email="bo@other.com", role="recruiter")


@pytest.fixture
def ana(core, hasher):
    return create_user(core, hasher)


@pytest.fixture
def acme(core, rita):
    return companies.register_company(core, CompanyCreate(company_name="Acme"), rita.id)


def job_create(company_id, **overrides):
    data = {
        "title": "Backend Engineer",
        "description": "Build Flask APIs",
        "requirements": "python, flask",
        "salary": 100000,
        "location": "Remote",
        "job_type": "Full-time",
        "experience": 2,
        "position": 1,
        "company_id": company_id,
    }
    data.update(overrides)
    return JobCreate(**data)


@pytest.fixture
def job(core, rita, acme):
    return jobs.create_job(core, job_create(acme.id), rita.id)


class TestCompanies:

    def test_register(self, acme, rita):
        assert acme.name == "Acme"
        assert acme.user_id == rita.id

    def test_duplicate_precheck_is_400(self, core, rita, acme):
        with pytest.raises(DuplicateError) as exc_info:
            companies.register_company(core, CompanyCreate(company_name="Acme"), rita.id)
        assert exc_info.value.status_code == 400

    def test_duplicate_at_store_is_409(self, core, rita, acme, monkeypatch):
        monkeypatch.setattr(core.company, "find_by_name", lambda name: None)
        with pytest.raises(DuplicateError) as exc_info:
            companies.register_company(core, CompanyCreate(company_name="Acme"), rita.id)
        assert exc_info.value.status_code == 409

    def test_list_empty(self, core, bo):
        with pytest.raises(NotFoundError):
            companies.list_user_companies(core, bo.id)

    def test_update_by_non_owner(self, core, bo, acme):
        with pytest.raises(ForbiddenError):
            companies.update_company(core, acme.id, CompanyUpdate(location="X"), bo.id)

    def test_update_only_given_fields(self, core, rita, acme):
        companies.update_company(core, acme.id, CompanyUpdate(description="Widgets"), rita.id)
        updated = companies.update_company(core, acme.id, CompanyUpdate(location="Lisbon"), rita.id)
        assert updated.description == "Widgets"
        assert updated.location == "Lisbon"

    def test_logo_failure_changes_nothing(self, core, rita, acme):
        logo = UploadedFile("logo.png", "image/png", b"png")
        with pytest.raises(UpstreamDependencyError):
            companies.update_company(
                core, acme.id, CompanyUpdate(location="Lisbon"), rita.id,
                uploader=FakeUploader(fail=True), logo=logo
            )
        assert companies.get_company(core, acme.id).location is None


class TestJobs:

    def test_create(self, job, rita, acme):
        assert job.created_by == rita.id
        assert job.company.id == acme.id
        assert job.requirements == ["python", "flask"]

    def test_create_for_foreign_company(self, core, bo, acme):
        with pytest.raises(ForbiddenError):
            jobs.create_job(core, job_create(acme.id), bo.id)

    def test_search(self, core, job):
        assert [j.id for j in jobs.search_jobs(core, "flask")] == [job.id]
        with pytest.raises(NotFoundError):
            jobs.search_jobs(core, "cobol")

    def test_recruiter_jobs(self, core, job, rita, bo):
        assert [j.id for j in jobs.list_recruiter_jobs(core, rita.id)] == [job.id]
        with pytest.raises(NotFoundError):
            jobs.list_recruiter_jobs(core, bo.id)

    def test_delete_by_non_owner_keeps_job(self, core, job, bo):
        with pytest.raises(ForbiddenError) as exc_info:
            jobs.delete_job(core, job.id, bo.id)
        assert exc_info.value.message == "You are not authorized to delete this job."
        assert jobs.get_job(core, job.id).id == job.id

    def test_delete_then_missing(self, core, job, rita):
        jobs.delete_job(core, job.id, rita.id)
        with pytest.raises(NotFoundError):
            jobs.delete_job(core, job.id, rita.id)


class TestApplications:

    def test_apply(self, core, job, ana):
        application = applications.apply_to_job(core, job.id, ana.id)
        assert application.status == "pending"
        assert jobs.get_job(core, job.id).applications == [application.id]

    def test_apply_twice(self, core, job, ana):
        applications.apply_to_job(core, job.id, ana.id)
        with pytest.raises(DuplicateError) as exc_info:
            applications.apply_to_job(core, job.id, ana.id)
        assert exc_info.value.status_code == 400

    def test_apply_race_is_409(self, core, job, ana, monkeypatch):
        applications.apply_to_job(core, job.id, ana.id)
        monkeypatch.setattr(core.application, "find", lambda job_id, applicant_id: None)
        with pytest.raises(DuplicateError) as exc_info:
            applications.apply_to_job(core, job.id, ana.id)
        assert exc_info.value.status_code == 409

    def test_apply_unknown_job(self, core, ana):
        with pytest.raises(NotFoundError):
            applications.apply_to_job(core, "missing", ana.id)

    def test_applicants_only_for_job_owner(self, core, job, ana, bo, rita):
        applications.apply_to_job(core, job.id, ana.id)
        with pytest.raises(ForbiddenError):
            applications.list_applicants(core, job.id, bo.id)
        result = applications.list_applicants(core, job.id, rita.id)
        assert result.applications[0].applicant.email == "ana@x.com"

    def test_update_status(self, core, job, ana, rita, bo):
        application = applications.apply_to_job(core, job.id, ana.id)
        with pytest.raises(ForbiddenError):
            applications.update_status(core, application.id, StatusUpdate(status="accepted"), bo.id)
        updated = applications.update_status(
            core, application.id, StatusUpdate(status="REJECTED"), rita.id
        )
        assert updated.status == "rejected"

    def test_applied_jobs_embed_job_and_company(self, core, job, ana):
        applications.apply_to_job(core, job.id, ana.id)
        [application] = applications.list_applied_jobs(core, ana.id)
        assert application.job.id == job.id
        assert application.job.company.name == "Acme"


def test_sqlite_integrity_error_is_what_operations_raise(core, acme, rita):
    with pytest.raises(sqlite3.IntegrityError):
        core.company.create(name="Acme", user_id=rita.id)
