"""Resolve the caller of a request to an identity and a role."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..dbmodels import UserRoles
from ..errors import Unauthenticated, Unauthorized, translate_store_errors
from ..logging import get_logger
from .adapters.base import AuthAdapter, AuthenticationError
from .context import AuthContext, Role

logger = get_logger(__name__)

BEARER_SCHEME = "bearer"


def extract_bearer_token(authorization: str | None) -> str:
    """
    Pull the token out of an ``Authorization: Bearer <token>`` header value.

    Raises:
        Unauthenticated: If the header is missing, malformed or carries no token
    """
    if not authorization:
        raise Unauthenticated("Authorization header required")

    # The auth scheme is case-insensitive (RFC 7235)
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != BEARER_SCHEME:
        logger.warning("Invalid authorization format received")
        raise Unauthenticated("Invalid authorization format. Expected: Bearer <token>")

    token = token.strip()
    if not token:
        logger.warning("Empty token provided")
        raise Unauthenticated("Empty token")

    return token


async def lookup_role(session: AsyncSession, user_id: str) -> Role:
    """Return the caller's role; a missing role row means ``employee``."""
    with translate_store_errors():
        result = await session.execute(select(UserRoles.role).where(UserRoles.user_id == user_id))
        role = result.scalar_one_or_none()

    if role is None:
        logger.debug("No role row for user, defaulting to employee", user_id=user_id)
    return Role.parse(role)


async def resolve_auth_context(
    authorization: str | None,
    adapter: AuthAdapter,
    session: AsyncSession,
) -> AuthContext:
    """
    Turn the Authorization header into an AuthContext.

    1. Extracts the Bearer token from the header
    2. Verifies it with the configured identity adapter
    3. Looks up the identity's role

    Raises:
        Unauthenticated: No usable credential on the request
        Unauthorized: The identity provider rejected the credential
        StoreError: The role lookup failed
    """
    token = extract_bearer_token(authorization)

    try:
        principal = await adapter.verify_token(token)
    except AuthenticationError as e:
        logger.warning("Authentication failed", error=str(e))
        raise Unauthorized("Unauthorized") from e

    subject = principal.get("subject")
    if not subject:
        raise Unauthorized("Unauthorized")

    role = await lookup_role(session, subject)

    logger.debug(
        "Request authenticated",
        provider=principal.get("provider"),
        subject=subject,
        role=role.value,
    )

    return AuthContext(user_id=subject, role=role, principal=principal, token=token)
