"""Authentication module for Elevate Core.

This module provides authentication and authorization functionality:
- Schema validation for auth operations
- Session token signing and verification (JWT)
- Password hashing and verification (bcrypt)
- Session guard for protected endpoints
- Ownership and role checks

User endpoints (under /api/user):
- POST /register - Create an account (no token issued)
- POST /login - Verify credentials and set the session cookie
- GET /logout - Clear the session cookie
- GET /me - Current user
- PATCH /profile/update - Update the current user's profile
"""

from . import authorization, password, schemas, token

__all__ = ["authorization", "password", "schemas", "token"]
