"""Media uploads proxied to Cloudinary.

Profile photos, company logos and resumes are pushed to Cloudinary's upload
API; only the returned URL is stored. Any failure talking to Cloudinary is
raised as UpstreamDependencyError and is never retried here.
"""

import hashlib
import logging
from dataclasses import dataclass

import httpx

from .exceptions import UpstreamDependencyError, ValidationError
from .utils import isodatetime

logger = logging.getLogger(__name__)

CLOUDINARY_API_URL = "https://api.cloudinary.com/v1_1"


@dataclass(frozen=True)
class UploadedFile:
    """A file received in a multipart request."""

    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)

    @classmethod
    def from_storage(cls, storage) -> "UploadedFile | None":
        """Build from a werkzeug FileStorage. Empty file inputs give None."""
        if storage is None or not storage.filename:
            return None
        return cls(
            filename=storage.filename,
            content_type=storage.mimetype or "application/octet-stream",
            data=storage.read(),
        )


@dataclass(frozen=True)
class UploadResult:
    url: str
    original_name: str


class CloudinaryUploader:
    """Signed uploads to the Cloudinary REST API."""

    def __init__(
        self,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings) -> "CloudinaryUploader | None":
        """Build an uploader, or None when credentials are not configured."""
        if not settings.media_uploads_configured:
            return None
        return cls(
            cloud_name=settings.cloudinary_cloud_name,
            api_key=settings.cloudinary_api_key,
            api_secret=settings.cloudinary_api_secret,
            timeout=settings.upload_timeout,
        )

    def sign(self, params: dict[str, str]) -> str:
        """Cloudinary signature: SHA-1 of sorted ``k=v`` pairs joined by ``&`` plus the secret."""
        to_sign = "&".join(f"{key}={params[key]}" for key in sorted(params))
        return hashlib.sha1(f"{to_sign}{self.api_secret}".encode("utf-8")).hexdigest()

    def upload(
        self,
        file: UploadedFile,
        folder: str | None = None,
        resource_type: str = "image",
    ) -> UploadResult:
        """
        Upload a file and return its public URL.

        Args:
            file: File to upload
            folder: Optional Cloudinary folder
            resource_type: "image", "raw" or "auto"

        Raises:
            UpstreamDependencyError: If Cloudinary is unreachable, rejects the
                upload, or answers without a URL
        """
        params = {"timestamp": str(isodatetime.now_unix())}
        if folder:
            params["folder"] = folder

        data = {**params, "api_key": self.api_key, "signature": self.sign(params)}
        url = f"{CLOUDINARY_API_URL}/{self.cloud_name}/{resource_type}/upload"

        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.post(
                    url,
                    data=data,
                    files={"file": (file.filename, file.data, file.content_type)},
                )
                response.raise_for_status()
                body = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Cloudinary upload rejected: HTTP {e.response.status_code}")
            raise UpstreamDependencyError(
                "Media upload failed",
                {"status_code": e.response.status_code}
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Cloudinary upload failed: {e}")
            raise UpstreamDependencyError("Media upload failed") from e

        secure_url = body.get("secure_url") if isinstance(body, dict) else None
        if not secure_url:
            logger.error("Cloudinary response has no secure_url")
            raise UpstreamDependencyError("Media upload failed")

        return UploadResult(url=secure_url, original_name=file.filename)


def validate_resume(file: UploadedFile, allowed_types: list[str], max_bytes: int) -> None:
    """
    Check a resume before uploading it.

    Raises:
        ValidationError: If the MIME type is not allowed or the file is too big
    """
    if file.content_type not in allowed_types:
        raise ValidationError(
            "Unsupported resume file type.",
            {"content_type": file.content_type}
        )
    if file.size > max_bytes:
        raise ValidationError(
            f"Resume file too large (max {max_bytes // (1024 * 1024)}MB).",
            {"size": file.size}
        )


def upload_file(
    uploader: CloudinaryUploader | None,
    file: UploadedFile,
    failure_message: str,
    folder: str | None = None,
    resource_type: str = "image",
) -> UploadResult:
    """
    Upload through the configured uploader, reporting failures with a
    caller-specific message.

    Raises:
        UpstreamDependencyError: If uploads are not configured or the upload fails
    """
    if uploader is None:
        logger.error("Upload attempted but Cloudinary is not configured")
        raise UpstreamDependencyError(failure_message, {"reason": "uploads_not_configured"})

    try:
        return uploader.upload(file, folder=folder, resource_type=resource_type)
    except UpstreamDependencyError as e:
        raise UpstreamDependencyError(failure_message, e.details) from e
