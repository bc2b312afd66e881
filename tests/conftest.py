"""Shared test fixtures for elevate-core."""

import io
import re

import pytest

from elevate_core.main import app
from elevate_core.config import settings
from elevate_core import extensions
from elevate_core.auth import schemas, service
from elevate_core.auth.password import PasswordHasher
from elevate_core.auth.token import TokenCodec
from elevate_core.db import get_core, init_db
from elevate_core.exceptions import UpstreamDependencyError
from elevate_core.media import UploadedFile, UploadResult


class FakeUploader:
    """Stands in for CloudinaryUploader; records every upload."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls = []

    def upload(self, file, folder=None, resource_type="image"):
        self.calls.append({"file": file, "folder": folder, "resource_type": resource_type})
        if self.fail:
            raise UpstreamDependencyError("Media upload failed", {"status_code": 500})
        return UploadResult(
            url=f"https://media.test/{folder or 'uploads'}/{file.filename}",
            original_name=file.filename,
        )


@pytest.fixture
def db_path(tmp_path, monkeypatch):
    """Point settings at a fresh temp-file database with the schema loaded."""
    path = tmp_path / "elevate-test.db"
    monkeypatch.setattr(settings, "database_path", str(path))
    init_db()
    return path


@pytest.fixture
def core(db_path):
    """Non-atomic Core on the test database. Writes stay on its connection."""
    core = get_core()
    yield core
    core._conn.close()


@pytest.fixture
def hasher():
    """Cheap bcrypt work factor for tests."""
    return PasswordHasher(work_factor=4)


@pytest.fixture
def codec():
    """Token codec sharing the app's secret, so its tokens pass the guard."""
    return TokenCodec.from_settings(settings)


@pytest.fixture
def uploader():
    return FakeUploader()


@pytest.fixture
def photo():
    return UploadedFile(filename="ana.png", content_type="image/png", data=b"\x89PNG....")


@pytest.fixture
def client(db_path, hasher, uploader, monkeypatch):
    """Test client on a fresh database with a fake media uploader."""
    monkeypatch.setitem(app.extensions, extensions.PASSWORD_HASHER, hasher)
    monkeypatch.setitem(app.extensions, extensions.MEDIA_UPLOADER, uploader)

    app.config['TESTING'] = True
    with app.test_client() as client:
        yield client


# ============================================================================
# Helpers
# ============================================================================


def registration(**overrides) -> dict:
    """Registration payload for Ana the seeker, with overrides."""
    data = {
        "name": "Ana",
        "email": "ana@x.com",
        "phone": "1234567890",
        "password": "secret1",
        "role": "seeker",
    }
    data.update(overrides)
    return data


def create_user(core, hasher, **overrides) -> schemas.UserResponse:
    """Register a user directly through the service and commit."""
    user = service.register_user(core, schemas.UserRegister(**registration(**overrides)), hasher)
    core._conn.commit()
    return user


def session_cookie(response) -> str | None:
    """Raw Set-Cookie header for the session cookie, if any."""
    for header in response.headers.getlist("Set-Cookie"):
        if header.startswith(f"{settings.cookie_name}="):
            return header
    return None


def session_token(response) -> str:
    """Token value from the session Set-Cookie header."""
    header = session_cookie(response)
    assert header is not None, "response did not set the session cookie"
    return re.match(rf"{settings.cookie_name}=([^;]*)", header).group(1)


def register_and_login(client, **overrides) -> dict:
    """Register over HTTP, log in (the client keeps the cookie), return the user."""
    data = registration(**overrides)
    response = client.post("/api/user/register", json=data)
    assert response.status_code == 201, response.get_json()
    response = client.post(
        "/api/user/login",
        json={"email": data["email"], "password": data["password"], "role": data["role"]},
    )
    assert response.status_code == 200, response.get_json()
    return response.get_json()["user"]


def file_field(data: bytes, filename: str, content_type: str):
    """Multipart file tuple for the Flask test client."""
    return (io.BytesIO(data), filename, content_type)


def login(client, email: str, role: str, password: str = "secret1"):
    """Log an existing user in on this client (replacing any session)."""
    response = client.post("/api/user/login", json={"email": email, "password": password, "role": role})
    assert response.status_code == 200, response.get_json()
    return response.get_json()["user"]


def job_payload(company_id: str, **overrides) -> dict:
    data = {
        "title": "Backend Engineer",
        "description": "Build Flask APIs",
        "requirements": "python, flask, sql",
        "salary": 120000,
        "location": "Remote",
        "job_type": "Full-time",
        "experience": 3,
        "position": 2,
        "company_id": company_id,
    }
    data.update(overrides)
    return data


@pytest.fixture
def recruiter(client):
    """Logged-in recruiter with a registered company.

    Returns (user, company) as JSON dicts.
    """
    user = register_and_login(client, name="Rita", email="rita@acme.com", role="recruiter")
    response = client.post("/api/company/register", json={"company_name": "Acme"})
    assert response.status_code == 201, response.get_json()
    return user, response.get_json()["company"]


@pytest.fixture
def posted_job(client, recruiter):
    """A job posted by the recruiter fixture's company."""
    _user, company = recruiter
    response = client.post("/api/job/post", json=job_payload(company["id"]))
    assert response.status_code == 201, response.get_json()
    return response.get_json()["job"]
