"""
Session tokens.
Owns: JWT issuance and verification.
"""

from datetime import datetime, timedelta, timezone

import jwt
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError
from pydantic import ValidationError

from app.api.errors import ForbiddenException
from .models import AuthenticatedUser

ALGORITHM = "HS256"

# 24 hours
DEFAULT_TTL_SECONDS = 86400


class TokenService:
    """
    Stateless, signed, time-limited session tokens.

    There is no revocation list: a token stays valid until ``exp``.
    """

    def __init__(self, secret: str, ttl_seconds: int = DEFAULT_TTL_SECONDS):
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        self._secret = secret
        self.ttl_seconds = ttl_seconds

    def issue(
        self,
        user_id: str,
        username: str,
        email: str,
        now: datetime | None = None,
    ) -> str:
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "id": str(user_id),
            "username": username,
            "email": email,
            "iat": issued_at,
            "exp": issued_at + timedelta(seconds=self.ttl_seconds),
        }
        return jwt.encode(payload, self._secret, algorithm=ALGORITHM)

    def verify(self, token: str) -> AuthenticatedUser:
        """
        Decode a token and check its signature and expiry.

        Raises:
            ForbiddenException: Token is malformed, tampered or expired
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                options={"require": ["id", "iat", "exp"]},
            )
        except ExpiredSignatureError:
            raise ForbiddenException("Token expired", details={"token_expired": True})
        except InvalidTokenError:
            raise ForbiddenException("Invalid token")

        try:
            return AuthenticatedUser.model_validate(payload)
        except ValidationError:
            raise ForbiddenException("Invalid token payload")
