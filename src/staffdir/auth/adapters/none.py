"""No-auth adapter for local development without an identity provider."""

from __future__ import annotations

import os

from ...logging import get_logger
from .base import AuthenticationError, Principal

logger = get_logger(__name__)


class NoAuthAdapter:
    """
    Adapter that accepts any non-empty bearer token as a fixed development user.

    The Authorization header is still required; only verification is skipped.
    WARNING: Only use this in development environments!
    """

    def __init__(self, default_user_id: str = "dev-user"):
        self.default_user_id = default_user_id

        environment = os.getenv("ENVIRONMENT", "").lower()
        if environment in ("production", "prod"):
            logger.error(
                "NoAuthAdapter detected in production environment! "
                "This is a security risk and should never be used in production.",
                environment=environment,
            )
            raise RuntimeError(
                "NoAuthAdapter cannot be used in production environments. "
                "Please configure a proper authentication provider."
            )

        logger.warning(
            "NoAuthAdapter is active - any bearer token is accepted. "
            "This should ONLY be used in development.",
            user_id=default_user_id,
        )

    async def verify_token(self, token: str) -> Principal:
        """Return the development principal for any non-empty token."""
        if not token:
            raise AuthenticationError("Token required (even in no-auth mode)")

        return Principal(
            provider="none",
            subject=self.default_user_id,
            email="dev@example.com",
            display_name="Development User",
            claims={"mode": "development"},
        )
