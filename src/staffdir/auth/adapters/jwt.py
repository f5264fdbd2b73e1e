"""JWT authentication adapter for self-issued tokens."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt
from jwt.exceptions import InvalidTokenError

from ...logging import get_logger
from .base import AuthenticationError, Principal

logger = get_logger(__name__)


class JWTAuthAdapter:
    """JWT authentication adapter for self-issued tokens."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        issuer: str = "staffdir",
        audience: str = "staffdir-api",
        token_expiry_hours: int = 24,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.issuer = issuer
        self.audience = audience
        self.token_expiry_hours = token_expiry_hours

    async def verify_token(self, token: str) -> Principal:
        """Verify a JWT token and return the principal."""
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                issuer=self.issuer,
                audience=self.audience,
                options={
                    "verify_exp": True,
                    "verify_nbf": True,
                    "verify_iat": True,
                },
            )

            subject = payload.get("sub")
            if not subject:
                raise AuthenticationError("Missing 'sub' claim in token")

            principal = Principal(provider="jwt", subject=subject)

            if email := payload.get("email"):
                principal["email"] = email
            if display_name := payload.get("name"):
                principal["display_name"] = display_name

            principal["claims"] = payload

            return principal

        except AuthenticationError:
            raise
        except InvalidTokenError as e:
            logger.warning("JWT token validation failed", error=str(e))
            raise AuthenticationError("Invalid token") from e

    def issue_token(
        self, subject: str, claims: dict | None = None, expires_in_hours: int | None = None
    ) -> str:
        """Issue a signed token for ``subject`` (operator CLI and tests)."""
        now = datetime.now(UTC)
        hours = expires_in_hours if expires_in_hours is not None else self.token_expiry_hours

        payload = {
            "iss": self.issuer,
            "aud": self.audience,
            "sub": subject,
            "iat": now,
            "nbf": now,
            "exp": now + timedelta(hours=hours),
        }

        if claims:
            payload.update(claims)

        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)
