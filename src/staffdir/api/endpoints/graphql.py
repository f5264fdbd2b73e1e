"""
The single RPC endpoint: ``POST /graphql``.
"""

from __future__ import annotations

import json
from typing import Any

from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from ...auth.adapters.base import AuthAdapter
from ...auth.factory import get_auth_adapter
from ...auth.resolver import resolve_auth_context
from ...config import settings
from ...database.connection import get_async_session
from ...errors import DirectoryError, InvalidDocument, StoreError, store_error_message
from ...graphql.dispatcher import dispatch
from ...graphql.envelope import error_envelope, status_for, success_envelope
from ...logging import get_logger, set_user_context

logger = get_logger(__name__)

router = APIRouter()

CORS_ALLOW_METHODS = "GET, POST, PUT, DELETE, OPTIONS"
CORS_ALLOW_HEADERS = "Content-Type, Authorization, X-Client-Info, Apikey"


def cors_headers(request: Request) -> dict[str, str]:
    """
    CORS headers for a /graphql response, honouring ``settings.cors_origins``.

    A wildcard allows every origin; otherwise the request's Origin is echoed
    back only when it is listed.
    """
    headers = {
        "Access-Control-Allow-Methods": CORS_ALLOW_METHODS,
        "Access-Control-Allow-Headers": CORS_ALLOW_HEADERS,
    }

    if "*" in settings.cors_origins:
        headers["Access-Control-Allow-Origin"] = "*"
        return headers

    origin = request.headers.get("origin")
    if origin and origin in settings.cors_origins:
        headers["Access-Control-Allow-Origin"] = origin
    return headers


def resolve_auth_adapter(request: Request) -> AuthAdapter:
    """Adapter pinned on the app (tests, embedding) or the configured one."""
    adapter = getattr(request.app.state, "auth_adapter", None)
    if adapter is not None:
        return adapter
    return get_auth_adapter()


async def read_request_body(request: Request) -> dict[str, Any]:
    """
    Decode the ``{query, variables}`` body.

    Raises:
        InvalidDocument: If the body is not a JSON object
    """
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise InvalidDocument("Request body must be valid JSON") from e

    if not isinstance(body, dict):
        raise InvalidDocument("Request body must be a JSON object")
    return body


def error_response(request: Request, error: DirectoryError) -> JSONResponse:
    status_code = status_for(error, coarse=settings.coarse_error_status)
    if status_code >= 500:
        logger.error("Request failed", code=error.code, error=error.message)
    else:
        logger.info("Request rejected", code=error.code, error=error.message)
    return JSONResponse(
        error_envelope(error), status_code=status_code, headers=cors_headers(request)
    )


@router.options("/graphql")
async def graphql_preflight(request: Request) -> Response:
    """CORS preflight."""
    return Response(status_code=200, headers=cors_headers(request))


@router.post("/graphql")
async def graphql_endpoint(request: Request) -> JSONResponse:
    """
    Authenticate the caller, dispatch the named operation and wrap the outcome.

    Every failure, expected or not, comes back as an error envelope.
    """
    authorization = request.headers.get("authorization")

    try:
        adapter = resolve_auth_adapter(request)
        async with get_async_session() as session:
            auth = await resolve_auth_context(authorization, adapter, session)
            set_user_context(auth.user_id)

            body = await read_request_body(request)
            data = await dispatch(body.get("query"), body.get("variables"), auth, session)
    except DirectoryError as e:
        return error_response(request, e)
    except SQLAlchemyError as e:
        # Raised at commit time, after the handler already returned
        return error_response(request, StoreError(store_error_message(e)))
    except Exception as e:
        logger.exception("Unhandled error while serving GraphQL request")
        return error_response(request, DirectoryError(str(e) or "Internal server error"))

    return JSONResponse(success_envelope(data), headers=cors_headers(request))
