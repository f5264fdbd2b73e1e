"""Supabase authentication adapter."""

from __future__ import annotations

from supabase import Client, create_client

from ...logging import get_logger
from .base import AuthenticationError, Principal

logger = get_logger(__name__)


class SupabaseAuthAdapter:
    """Exchanges access tokens for users through the Supabase Auth API."""

    def __init__(self, url: str, service_role_key: str):
        """
        Initialize Supabase adapter.

        Args:
            url: Supabase project URL
            service_role_key: Service role key used to call the Auth API
        """
        self.url = url
        self.service_role_key = service_role_key
        self.client: Client = create_client(url, service_role_key)

    async def verify_token(self, token: str) -> Principal:
        """Verify a Supabase access token and return the principal."""
        try:
            user_response = self.client.auth.get_user(token)
        except Exception as e:
            logger.warning("Supabase token validation failed", error=str(e))
            raise AuthenticationError(f"Invalid token: {e}") from e

        if not user_response or not user_response.user:
            raise AuthenticationError("Invalid or expired token")

        user = user_response.user
        principal = Principal(provider="supabase", subject=user.id)

        if user.email:
            principal["email"] = user.email

        if user.user_metadata:
            if display_name := user.user_metadata.get("name") or user.user_metadata.get(
                "full_name"
            ):
                principal["display_name"] = display_name

        return principal
