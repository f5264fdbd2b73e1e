"""
staffdir backend
Employee directory service behind a GraphQL-style RPC endpoint
"""

__version__ = "0.1.0"

from .config import settings

__all__ = ["settings", "__version__"]
