"""Authentication and authorization for staffdir."""

from .adapters.base import AuthAdapter, AuthenticationError, Principal
from .context import AuthContext, Role
from .factory import get_auth_adapter
from .resolver import extract_bearer_token, lookup_role, resolve_auth_context

__all__ = [
    "AuthAdapter",
    "AuthenticationError",
    "Principal",
    "AuthContext",
    "Role",
    "get_auth_adapter",
    "extract_bearer_token",
    "lookup_role",
    "resolve_auth_context",
]
