"""Application endpoints for Elevate Core.

- GET|POST /api/application/apply/{job_id}          - Apply to a job (seekers)
- GET      /api/application/get                     - Current user's applications
- GET      /api/application/{job_id}/applicants     - Applicants of a job (its creator)
- POST     /api/application/status/{id}/update      - Change status (job's creator)

Every route requires a session; CORS preflights pass through.
"""

from flask import Blueprint, g, jsonify, request

from ..auth.decorators import authenticate_request, role_required
from ..auth.schemas import Role
from ..db import get_core
from ..services import applications
from .schemas import StatusUpdate
from .validation import validate_request

applications_bp = Blueprint("applications", __name__)


@applications_bp.before_request
def authenticate():
    """Require a session for every application endpoint."""
    if request.method == "OPTIONS":
        return None
    authenticate_request()


@applications_bp.route("/apply/<job_id>", methods=["GET", "POST"])
@role_required(Role.SEEKER.value)
def apply_job(job_id: str):
    """
    Apply to a job.

    Returns:
        201: {"message", "application", "success": true}
        400: Already applied
        403: Caller is not a seeker
        404: Unknown job
    """
    with get_core(atomic=True) as core:
        application = applications.apply_to_job(core, job_id, g.user_id)

    return jsonify({
        "message": "Job applied successfully.",
        "application": application.model_dump(),
        "success": True,
    }), 201


@applications_bp.get("/get")
def get_applied_jobs():
    """Current user's applications with job and company (404 if none)."""
    result = applications.list_applied_jobs(get_core(), g.user_id)
    return jsonify({
        "applications": [application.model_dump() for application in result],
        "success": True,
    }), 200


@applications_bp.get("/<job_id>/applicants")
def get_applicants(job_id: str):
    """A job with its applications and applicant profiles."""
    result = applications.list_applicants(get_core(), job_id, g.user_id)
    return jsonify({
        "job": result.job.model_dump(),
        "applications": [application.model_dump() for application in result.applications],
        "success": True,
    }), 200


@applications_bp.post("/status/<application_id>/update")
@validate_request
def update_status(application_id: str, data: StatusUpdate):
    """
    Change an application's status.

    Request Body:
        - status: "pending", "accepted" or "rejected" (case-insensitive)

    Returns:
        200: {"message", "application", "success": true}
        400: Missing or unknown status
        403: Caller did not create the job
        404: Unknown application
    """
    with get_core(atomic=True) as core:
        application = applications.update_status(core, application_id, data, g.user_id)

    return jsonify({
        "message": "Status updated successfully.",
        "application": application.model_dump(),
        "success": True,
    }), 200
