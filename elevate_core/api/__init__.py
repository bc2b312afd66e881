"""API endpoints for Elevate Core.

This module provides the api blueprint that aggregates all resources:
- /user        - Accounts and sessions
- /company     - Companies
- /job         - Job postings
- /application - Job applications

The api blueprint is registered in main.py under settings.api_prefix.
Session checks are declared per blueprint (before_request) or per endpoint
(@auth_required / @role_required); see each module.
"""

from flask import Blueprint

from ..config import settings
from .applications import applications_bp
from .companies import companies_bp
from .jobs import jobs_bp
from .users import users_bp

api_bp = Blueprint("api", __name__, url_prefix=settings.api_prefix)

api_bp.register_blueprint(users_bp, url_prefix="/user")
api_bp.register_blueprint(companies_bp, url_prefix="/company")
api_bp.register_blueprint(jobs_bp, url_prefix="/job")
api_bp.register_blueprint(applications_bp, url_prefix="/application")

__all__ = ["api_bp"]
