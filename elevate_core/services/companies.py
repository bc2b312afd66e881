"""Company service."""

import logging
import sqlite3

from ..api.schemas import CompanyCreate, CompanyResponse, CompanyUpdate
from ..auth.authorization import ensure_owner
from ..db import Core
from ..exceptions import DuplicateError, NotFoundError
from ..media import CloudinaryUploader, UploadedFile, upload_file

logger = logging.getLogger(__name__)

DUPLICATE_COMPANY_MESSAGE = "You can't register same company."


def register_company(core: Core, data: CompanyCreate, user_id: str) -> CompanyResponse:
    """
    Register a company owned by user_id.

    Raises:
        DuplicateError: 400 if the name is taken, 409 if the store rejects it
    """
    if core.company.find_by_name(data.company_name) is not None:
        raise DuplicateError(
            DUPLICATE_COMPANY_MESSAGE, {"name": data.company_name}, status_code=400
        )

    try:
        company_id = core.company.create(name=data.company_name, user_id=user_id)
    except sqlite3.IntegrityError as e:
        raise DuplicateError(DUPLICATE_COMPANY_MESSAGE, {"name": data.company_name}) from e

    logger.info(f"Company {company_id} registered by {user_id}")
    return CompanyResponse.from_row(core.company.get_by_id(company_id))


def list_user_companies(core: Core, user_id: str) -> list[CompanyResponse]:
    """
    Companies owned by user_id.

    Raises:
        NotFoundError: If the user owns no companies
    """
    rows = core.company.list_by_owner(user_id)
    if not rows:
        raise NotFoundError("Companies not found.", {"user_id": user_id})
    return [CompanyResponse.from_row(row) for row in rows]


def get_company(core: Core, company_id: str) -> CompanyResponse:
    return CompanyResponse.from_row(core.company.get_by_id(company_id))


def update_company(
    core: Core,
    company_id: str,
    data: CompanyUpdate,
    user_id: str,
    uploader: CloudinaryUploader | None = None,
    logo: UploadedFile | None = None,
) -> CompanyResponse:
    """
    Update a company. Only its owner may do so.

    Raises:
        NotFoundError: If the company doesn't exist
        ForbiddenError: If user_id is not the owner
        DuplicateError: If the new name belongs to another company
        UpstreamDependencyError: If the logo upload fails
    """
    row = core.company.get_by_id(company_id)
    ensure_owner(user_id, row["user_id"], "You are not authorized to update this company.")

    changes = data.model_dump(exclude_unset=True)

    if logo is not None:
        changes["logo"] = upload_file(uploader, logo, "Failed to upload logo.").url

    try:
        core.company.update(company_id, changes)
    except sqlite3.IntegrityError as e:
        raise DuplicateError(DUPLICATE_COMPANY_MESSAGE, {"name": changes.get("name")}) from e

    return CompanyResponse.from_row(core.company.get_by_id(company_id))
