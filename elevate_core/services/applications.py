"""Job application service."""

import logging
import sqlite3

from ..api.schemas import (
    ApplicantsResponse,
    ApplicationResponse,
    CompanyResponse,
    JobResponse,
    StatusUpdate,
)
from ..auth.authorization import ensure_owner
from ..auth.schemas import UserResponse
from ..db import Core
from ..exceptions import DuplicateError, NotFoundError

logger = logging.getLogger(__name__)

ALREADY_APPLIED_MESSAGE = "You have already applied for this job."


def apply_to_job(core: Core, job_id: str, user_id: str) -> ApplicationResponse:
    """
    Apply to a job.

    Raises:
        DuplicateError: 400 if already applied, 409 if the store rejects it
        NotFoundError: If the job doesn't exist
    """
    if core.application.find(job_id, user_id) is not None:
        raise DuplicateError(ALREADY_APPLIED_MESSAGE, {"job_id": job_id}, status_code=400)

    core.job.get_by_id(job_id)

    try:
        application_id = core.application.create(job_id=job_id, applicant_id=user_id)
    except sqlite3.IntegrityError as e:
        raise DuplicateError(ALREADY_APPLIED_MESSAGE, {"job_id": job_id}) from e

    logger.info(f"User {user_id} applied to job {job_id}")
    return ApplicationResponse.from_row(core.application.get_by_id(application_id))


def list_applied_jobs(core: Core, user_id: str) -> list[ApplicationResponse]:
    """
    The user's applications, newest first, each with its job and company.

    Raises:
        NotFoundError: If the user has no applications
    """
    rows = core.application.list_by_applicant(user_id)
    if not rows:
        raise NotFoundError("No applications found.", {"user_id": user_id})

    jobs = core.job.get_many(list({row["job_id"] for row in rows}))
    companies = core.company.get_many(list({job["company_id"] for job in jobs.values()}))

    result = []
    for row in rows:
        job_row = jobs[row["job_id"]]
        company_row = companies.get(job_row["company_id"])
        job = JobResponse.from_row(
            job_row,
            company=CompanyResponse.from_row(company_row) if company_row else None
        )
        result.append(ApplicationResponse.from_row(row, job=job))
    return result


def list_applicants(core: Core, job_id: str, user_id: str) -> ApplicantsResponse:
    """
    A job's applications with applicant profiles. Only the job's creator may
    see them.

    Raises:
        NotFoundError: If the job doesn't exist
        ForbiddenError: If user_id is not the job's creator
    """
    job_row = core.job.get_by_id(job_id)
    ensure_owner(user_id, job_row["created_by"], "You are not authorized to view these applicants.")

    rows = core.application.list_by_job(job_id)
    applicants = core.user.get_many(list({row["applicant_id"] for row in rows}))

    applications = [
        ApplicationResponse.from_row(
            row,
            applicant=(
                UserResponse.from_row(applicants[row["applicant_id"]])
                if row["applicant_id"] in applicants else None
            )
        )
        for row in rows
    ]
    job = JobResponse.from_row(job_row, applications=[row["id"] for row in rows])
    return ApplicantsResponse(job=job, applications=applications)


def update_status(
    core: Core,
    application_id: str,
    data: StatusUpdate,
    user_id: str
) -> ApplicationResponse:
    """
    Change an application's status. Only the job's creator may do so.

    Raises:
        NotFoundError: If the application doesn't exist
        ForbiddenError: If user_id is not the job's creator
    """
    row = core.application.get_by_id(application_id)
    job_row = core.job.get_by_id(row["job_id"])
    ensure_owner(user_id, job_row["created_by"], "You are not authorized to update this application.")

    core.application.update_status(application_id, data.status.value)
    logger.info(f"Application {application_id} set to {data.status.value}")
    return ApplicationResponse.from_row(core.application.get_by_id(application_id))
