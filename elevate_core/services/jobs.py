"""Job posting service."""

import logging

from ..api.schemas import CompanyResponse, JobCreate, JobResponse
from ..auth.authorization import ensure_owner
from ..db import Core
from ..exceptions import NotFoundError

logger = logging.getLogger(__name__)


def _with_companies(core: Core, rows) -> list[JobResponse]:
    """Convert job rows, embedding each job's company."""
    companies = core.company.get_many(list({row["company_id"] for row in rows}))
    return [
        JobResponse.from_row(
            row,
            company=(
                CompanyResponse.from_row(companies[row["company_id"]])
                if row["company_id"] in companies else None
            )
        )
        for row in rows
    ]


def create_job(core: Core, data: JobCreate, user_id: str) -> JobResponse:
    """
    Post a job for a company the poster owns.

    Raises:
        NotFoundError: If the company doesn't exist
        ForbiddenError: If user_id does not own the company
    """
    company = core.company.get_by_id(data.company_id)
    ensure_owner(user_id, company["user_id"], "You can only post jobs for your own company.")

    job_id = core.job.create(
        title=data.title,
        description=data.description,
        requirements=data.requirements,
        salary=data.salary,
        location=data.location,
        job_type=data.job_type,
        experience_level=data.experience,
        position=data.position,
        company_id=data.company_id,
        created_by=user_id,
    )

    logger.info(f"Job {job_id} posted by {user_id}")
    return JobResponse.from_row(core.job.get_by_id(job_id), company=CompanyResponse.from_row(company))


def search_jobs(core: Core, keyword: str = "") -> list[JobResponse]:
    """
    Jobs whose title or description contains keyword, newest first.

    Raises:
        NotFoundError: If nothing matches
    """
    rows = core.job.search(keyword or "")
    if not rows:
        raise NotFoundError("No jobs found.", {"keyword": keyword})
    return _with_companies(core, rows)


def get_job(core: Core, job_id: str) -> JobResponse:
    """
    A job with its company and application IDs.

    Raises:
        NotFoundError: If the job doesn't exist
    """
    row = core.job.get_by_id(job_id)
    job = _with_companies(core, [row])[0]
    job.applications = [app["id"] for app in core.application.list_by_job(job_id)]
    return job


def list_recruiter_jobs(core: Core, user_id: str) -> list[JobResponse]:
    """
    Jobs created by user_id, newest first.

    Raises:
        NotFoundError: If the user has posted nothing
    """
    rows = core.job.list_by_creator(user_id)
    if not rows:
        raise NotFoundError("No jobs found for this recruiter.", {"user_id": user_id})
    return _with_companies(core, rows)


def delete_job(core: Core, job_id: str, user_id: str) -> None:
    """
    Delete a job. Only its creator may do so; its applications go with it.

    Raises:
        NotFoundError: If the job doesn't exist
        ForbiddenError: If user_id is not the creator
    """
    row = core.job.get_by_id(job_id)
    ensure_owner(user_id, row["created_by"], "You are not authorized to delete this job.")

    core.job.delete(job_id)
    logger.info(f"Job {job_id} deleted by {user_id}")
