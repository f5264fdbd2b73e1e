"""Factory for creating auth adapters based on configuration."""

from __future__ import annotations

import json
import os

from ..config import settings
from .adapters.base import AuthAdapter
from .adapters.jwt import JWTAuthAdapter
from .adapters.none import NoAuthAdapter

# Optional Supabase adapter - imported conditionally
try:
    from .adapters.supabase import SupabaseAuthAdapter

    SUPABASE_AVAILABLE = True
except ImportError:
    SUPABASE_AVAILABLE = False
    SupabaseAuthAdapter = None  # type: ignore


def _load_auth_config() -> dict:
    config_str = os.getenv("STAFFDIR_AUTH_CONFIG")
    if config_str is None:
        return dict(settings.auth_config)
    try:
        config = json.loads(config_str)
    except json.JSONDecodeError:
        return {}
    return config if isinstance(config, dict) else {}


def get_auth_adapter() -> AuthAdapter:
    """Create and return the configured auth adapter."""
    provider = os.getenv("STAFFDIR_AUTH_PROVIDER", settings.auth_provider)
    config = _load_auth_config()

    if provider == "none":
        return NoAuthAdapter(default_user_id=config.get("default_user_id", "dev-user"))

    elif provider == "jwt":
        secret_key = (
            config.get("secret_key") or os.getenv("STAFFDIR_JWT_SECRET") or settings.jwt_secret
        )
        if not secret_key:
            raise ValueError(
                "JWT secret key is required. Set STAFFDIR_JWT_SECRET or provide in config."
            )

        return JWTAuthAdapter(
            secret_key=secret_key,
            algorithm=config.get("algorithm", settings.jwt_algorithm),
            issuer=config.get("issuer", settings.jwt_issuer),
            audience=config.get("audience", settings.jwt_audience),
        )

    elif provider == "supabase":
        if not SUPABASE_AVAILABLE:
            raise ValueError(
                "Supabase auth provider is not available. "
                "Install the supabase package: pip install 'staffdir[auth-supabase]'"
            )

        url = config.get("url") or os.getenv("SUPABASE_URL") or settings.supabase_url
        service_role_key = (
            config.get("service_role_key")
            or os.getenv("SUPABASE_SERVICE_ROLE_KEY")
            or settings.supabase_service_role_key
        )

        if not url or not service_role_key:
            raise ValueError(
                "Supabase URL and service role key are required. "
                "Set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY or provide in config."
            )

        return SupabaseAuthAdapter(url=url, service_role_key=service_role_key)  # type: ignore

    else:
        raise ValueError(f"Unsupported auth provider: {provider}")
