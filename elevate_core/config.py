"""Configuration management using pydantic-settings."""

from typing import Literal

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_JWT_SECRET = "change-me-in-production-use-env-var"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    database_path: str = "./data/elevate.db"
    api_prefix: str = "/api"
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

    # "development" or "production"; drives cookie flags and secret checks
    environment: str = "development"

    # JWT Configuration
    jwt_secret_key: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    jwt_expiry_hours: int = 24

    # Bcrypt work factor (higher = more secure but slower)
    # Tests swap in a hasher with work factor 4
    bcrypt_work_factor: int = 10

    # Session cookie
    # When unset, secure/samesite are derived from the environment
    cookie_name: str = "token"
    cookie_secure: bool | None = None
    cookie_samesite: Literal["Lax", "Strict", "None"] | None = None

    # Media host (Cloudinary upload API)
    cloudinary_cloud_name: str = ""
    cloudinary_api_key: str = ""
    cloudinary_api_secret: str = ""
    upload_timeout: float = 30.0

    # Resume uploads
    max_resume_bytes: int = 5 * 1024 * 1024
    resume_mime_types: list[str] = [
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False
    )

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def session_cookie_secure(self) -> bool:
        if self.cookie_secure is not None:
            return self.cookie_secure
        return self.is_production

    @property
    def session_cookie_samesite(self) -> str:
        if self.cookie_samesite is not None:
            return self.cookie_samesite
        return "None" if self.is_production else "Lax"

    @property
    def media_uploads_configured(self) -> bool:
        return bool(
            self.cloudinary_cloud_name
            and self.cloudinary_api_key
            and self.cloudinary_api_secret
        )

    @model_validator(mode="after")
    def validate_security_settings(self):
        """Reject configurations that would weaken session handling."""
        if self.environment != "development" and self.jwt_secret_key == DEFAULT_JWT_SECRET:
            raise ValueError(
                "JWT_SECRET_KEY must be set to a secure value outside development. "
                "Generate one with: "
                'python -c "import secrets; print(secrets.token_urlsafe(32))"'
            )
        # Browsers drop SameSite=None cookies that are not Secure
        if self.session_cookie_samesite == "None" and not self.session_cookie_secure:
            raise ValueError("cookie_samesite 'None' requires cookie_secure")
        return self


settings = Settings()
