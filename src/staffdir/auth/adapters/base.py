"""Base authentication adapter interface and types."""

from __future__ import annotations

from typing import Literal, NotRequired, Protocol, TypedDict


class Principal(TypedDict):
    """Identity extracted from an incoming token."""

    provider: Literal["supabase", "jwt", "none"]
    subject: str  # provider user id (sub)
    email: NotRequired[str]
    display_name: NotRequired[str]
    claims: NotRequired[dict]


class AuthAdapter(Protocol):
    """Provider-agnostic authentication adapter interface."""

    async def verify_token(self, token: str) -> Principal:
        """
        Verify a token and return the principal identity.

        Args:
            token: The authentication token to verify

        Returns:
            Principal containing identity information

        Raises:
            AuthenticationError: If token is invalid or expired
        """
        ...


class AuthenticationError(Exception):
    """Raised when an adapter cannot turn a token into an identity."""

    pass
