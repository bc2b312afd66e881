"""Job endpoints for Elevate Core.

- POST   /api/job/post             - Post a job (recruiters, own company)
- GET    /api/job/get?keyword=     - Search jobs (public)
- GET    /api/job/get/{id}         - Single job (public)
- GET    /api/job/getadminjobs     - Jobs posted by the current recruiter
- DELETE /api/job/delete/{id}      - Delete a job (its creator only)
"""

from flask import Blueprint, g, jsonify, request

from ..auth.decorators import auth_required, role_required
from ..auth.schemas import Role
from ..db import get_core
from ..services import jobs
from .schemas import JobCreate
from .validation import validate_request

jobs_bp = Blueprint("jobs", __name__)


@jobs_bp.post("/post")
@role_required(Role.RECRUITER.value)
@validate_request
def post_job(data: JobCreate):
    """
    Post a job.

    Request Body (JobCreate):
        - title, description, location, job_type, company_id: str
        - requirements: list[str] or comma-separated string
        - salary: positive number
        - experience: int (years)
        - position: int (open positions)

    Returns:
        201: {"message", "job", "success": true}
        400: Validation error
        403: Not a recruiter, or not the company's owner
        404: Unknown company
    """
    with get_core(atomic=True) as core:
        job = jobs.create_job(core, data, g.user_id)

    return jsonify({
        "message": "New job created successfully.",
        "job": job.model_dump(),
        "success": True,
    }), 201


@jobs_bp.get("/get")
def get_all_jobs():
    """
    Search jobs by keyword in title or description, newest first.

    Query Parameters:
        - keyword: str - Case-insensitive substring (optional)

    Returns:
        200: {"jobs": [...], "success": true}
        404: No jobs match
    """
    keyword = request.args.get("keyword", "")
    result = jobs.search_jobs(get_core(), keyword)
    return jsonify({"jobs": [job.model_dump() for job in result], "success": True}), 200


@jobs_bp.get("/get/<job_id>")
def get_job(job_id: str):
    """Single job with its company and application IDs."""
    job = jobs.get_job(get_core(), job_id)
    return jsonify({"job": job.model_dump(), "success": True}), 200


@jobs_bp.get("/getadminjobs")
@role_required(Role.RECRUITER.value)
def get_admin_jobs():
    """Jobs posted by the current recruiter (404 if none)."""
    result = jobs.list_recruiter_jobs(get_core(), g.user_id)
    return jsonify({"jobs": [job.model_dump() for job in result], "success": True}), 200


@jobs_bp.delete("/delete/<job_id>")
@auth_required
def delete_job(job_id: str):
    """
    Delete a job posting.

    Returns:
        200: {"message", "success": true}
        401: No valid session
        403: Caller did not create the job
        404: Unknown job
    """
    with get_core(atomic=True) as core:
        jobs.delete_job(core, job_id, g.user_id)

    return jsonify({"message": "Job deleted successfully.", "success": True}), 200
