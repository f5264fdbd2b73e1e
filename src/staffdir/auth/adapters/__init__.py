"""Authentication adapters for different identity providers."""

from .base import AuthAdapter, AuthenticationError, Principal
from .jwt import JWTAuthAdapter
from .none import NoAuthAdapter

# Always available adapters
__all__ = [
    "AuthAdapter",
    "AuthenticationError",
    "Principal",
    "JWTAuthAdapter",
    "NoAuthAdapter",
]

# Optional auth providers - imported conditionally to avoid import errors
try:
    from .supabase import SupabaseAuthAdapter

    __all__.append("SupabaseAuthAdapter")
except ImportError:
    pass
