"""Company endpoints for Elevate Core.

- POST /api/company/register          - Register a company (recruiters)
- GET  /api/company/get               - Companies owned by the current user
- GET  /api/company/get/{id}          - Single company
- PUT  /api/company/update/{id}       - Update company (owner; multipart logo in "file")

Every route requires a session; CORS preflights pass through.
"""

from flask import Blueprint, g, jsonify, request

from ..auth.decorators import authenticate_request, role_required
from ..auth.schemas import Role
from ..db import get_core
from ..extensions import get_media_uploader
from ..media import UploadedFile
from ..services import companies
from .schemas import CompanyCreate, CompanyUpdate
from .validation import validate_request

companies_bp = Blueprint("companies", __name__)


@companies_bp.before_request
def authenticate():
    """Require a session for every company endpoint."""
    if request.method == "OPTIONS":
        return None
    authenticate_request()


@companies_bp.post("/register")
@role_required(Role.RECRUITER.value)
@validate_request
def register_company(data: CompanyCreate):
    """
    Register a company owned by the current recruiter.

    Returns:
        201: {"message", "company", "success": true}
        400: Missing name or name already registered
        403: Caller is not a recruiter
    """
    with get_core(atomic=True) as core:
        company = companies.register_company(core, data, g.user_id)

    return jsonify({
        "message": "Company registered successfully.",
        "company": company.model_dump(),
        "success": True,
    }), 201


@companies_bp.get("/get")
def get_companies():
    """Companies owned by the current user (404 if none)."""
    result = companies.list_user_companies(get_core(), g.user_id)
    return jsonify({
        "companies": [company.model_dump() for company in result],
        "success": True,
    }), 200


@companies_bp.get("/get/<company_id>")
def get_company(company_id: str):
    """Single company (404 if unknown)."""
    company = companies.get_company(get_core(), company_id)
    return jsonify({"company": company.model_dump(), "success": True}), 200


@companies_bp.put("/update/<company_id>")
@validate_request
def update_company(company_id: str, data: CompanyUpdate):
    """
    Update a company's details and, optionally, its logo.

    Returns:
        200: {"message", "company", "success": true}
        403: Caller does not own the company
        404: Unknown company
        409: Name taken by another company
        502: Logo upload failed
    """
    logo = UploadedFile.from_storage(request.files.get("file"))

    with get_core(atomic=True) as core:
        company = companies.update_company(
            core,
            company_id,
            data,
            g.user_id,
            uploader=get_media_uploader(),
            logo=logo,
        )

    return jsonify({
        "message": "Company information updated.",
        "company": company.model_dump(),
        "success": True,
    }), 200
