"""
Uniform response envelope: ``{"data": ...}`` on success, ``{"errors": [...]}`` on failure.
"""

from __future__ import annotations

from typing import Any

from ..errors import DirectoryError, Unauthenticated, Unauthorized


def success_envelope(data: dict[str, Any]) -> dict[str, Any]:
    return {"data": data}


def error_envelope(error: DirectoryError) -> dict[str, Any]:
    return {
        "errors": [
            {
                "message": error.message,
                "extensions": {"code": error.code},
            }
        ]
    }


def status_for(error: DirectoryError, coarse: bool = False) -> int:
    """
    HTTP status for an error.

    In coarse mode only credential failures keep 401; everything else is 500.
    """
    if not coarse:
        return error.status_code
    if isinstance(error, Unauthenticated | Unauthorized):
        return 401
    return 500
