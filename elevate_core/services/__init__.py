"""Business logic for companies, jobs and applications.

Services take a Core plus the authenticated user ID and return response
schemas. User registration, login and profile logic lives in auth.service.
"""

from . import applications, companies, jobs

__all__ = ["applications", "companies", "jobs"]
