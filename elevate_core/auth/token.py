"""
Session token codec.

Session tokens are HS256 JWTs carrying the user ID (``sub``) and role, valid
for a fixed window (24 hours by default) from issuance. Tokens are stateless:
nothing is stored server-side, so a token stays valid until it expires even
after the user logs out.

The codec is built once from settings at startup and handed to the code that
needs it (see ``elevate_core.extensions``); it never reads settings itself.
"""

from datetime import datetime, timedelta

import jwt

from ..utils import isodatetime
from .schemas import TokenPayload

REQUIRED_CLAIMS = ["sub", "role", "iat", "exp"]


class TokenCodec:
    """Signs and verifies session tokens."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expiry: timedelta = timedelta(hours=24),
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expiry = expiry

    @classmethod
    def from_settings(cls, settings) -> "TokenCodec":
        return cls(
            secret_key=settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
            expiry=timedelta(hours=settings.jwt_expiry_hours),
        )

    def sign(self, subject: str, role: str, issued_at: datetime | None = None) -> str:
        """
        Issue a token for a principal.

        Args:
            subject: User ID
            role: User role at issuance time
            issued_at: Issuance time (defaults to now); expiry is measured from it

        Returns:
            Encoded JWT string
        """
        issued_at = issued_at or isodatetime.now_datetime()
        payload = {
            "sub": str(subject),
            "role": str(role),
            "iat": isodatetime.to_unix(issued_at),
            "exp": isodatetime.to_unix(issued_at + self.expiry),
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenPayload:
        """
        Verify signature and expiry and return the claims.

        Raises:
            jwt.ExpiredSignatureError: If the token has expired
            jwt.InvalidTokenError: If the token is malformed, forged, or
                missing a required claim
        """
        payload = jwt.decode(
            token,
            self.secret_key,
            algorithms=[self.algorithm],
            options={"require": REQUIRED_CLAIMS},
        )
        return TokenPayload(**payload)

    def expiry_remaining(self, token: str) -> timedelta | None:
        """Time left before the token expires, or None if it is not valid."""
        try:
            payload = self.verify(token)
        except jwt.InvalidTokenError:
            return None
        return timedelta(seconds=payload.exp - isodatetime.now_unix())


def decode_token_no_validation(token: str) -> dict:
    """
    Decode a token WITHOUT verifying it.

    For logging and debugging only. Never trust the result for
    authentication.
    """
    return jwt.decode(token, options={"verify_signature": False})
