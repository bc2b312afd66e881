"""Process-wide collaborators built once from settings.

main.py calls init_app() at startup; endpoints fetch the instances through
the getters below and pass them to services explicitly.
"""

from flask import Flask, current_app

from .auth.password import PasswordHasher
from .auth.token import TokenCodec
from .media import CloudinaryUploader

TOKEN_CODEC = "elevate.token_codec"
PASSWORD_HASHER = "elevate.password_hasher"
MEDIA_UPLOADER = "elevate.media_uploader"


def init_app(app: Flask, settings) -> None:
    """Build the token codec, password hasher and media uploader."""
    app.extensions[TOKEN_CODEC] = TokenCodec.from_settings(settings)
    app.extensions[PASSWORD_HASHER] = PasswordHasher(settings.bcrypt_work_factor)
    app.extensions[MEDIA_UPLOADER] = CloudinaryUploader.from_settings(settings)


def get_token_codec() -> TokenCodec:
    return current_app.extensions[TOKEN_CODEC]


def get_password_hasher() -> PasswordHasher:
    return current_app.extensions[PASSWORD_HASHER]


def get_media_uploader() -> CloudinaryUploader | None:
    """The configured uploader, or None when uploads are not configured."""
    return current_app.extensions[MEDIA_UPLOADER]
