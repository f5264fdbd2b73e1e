"""
Error taxonomy shared by the auth resolver, dispatcher and handlers.

Every failure a request can end in is a ``DirectoryError`` subclass. The
``code`` travels to the client in the error envelope's ``extensions`` and
``status_code`` selects the HTTP status of the response.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError


class DirectoryError(Exception):
    """Base class for every error rendered into the response envelope."""

    code = "INTERNAL_ERROR"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class Unauthenticated(DirectoryError):
    """No usable bearer credential on the request."""

    code = "UNAUTHENTICATED"
    status_code = 401


class Unauthorized(DirectoryError):
    """A credential was presented but the identity provider rejected it."""

    code = "UNAUTHORIZED"
    status_code = 401


class Forbidden(DirectoryError):
    """The caller's role does not allow the requested operation."""

    code = "FORBIDDEN"
    status_code = 403


class InvalidDocument(DirectoryError):
    """The request body or query document could not be understood."""

    code = "INVALID_DOCUMENT"
    status_code = 400


class InvalidVariables(InvalidDocument):
    """Operation variables failed validation."""

    code = "INVALID_VARIABLES"

    def __init__(self, message: str, fields: list[str] | None = None):
        super().__init__(message)
        self.fields = fields or []


class UnknownOperation(DirectoryError):
    code = "UNKNOWN_OPERATION"
    status_code = 400


class NotFound(DirectoryError):
    code = "NOT_FOUND"
    status_code = 404


class StoreError(DirectoryError):
    """The data store reported a fault; the driver message is passed through."""

    code = "STORE_ERROR"
    status_code = 500


def store_error_message(error: SQLAlchemyError) -> str:
    """Return the driver-level message of a SQLAlchemy error."""
    orig = getattr(error, "orig", None)
    return str(orig) if orig is not None else str(error)


@contextmanager
def translate_store_errors() -> Iterator[None]:
    """Re-raise SQLAlchemy faults raised inside the block as ``StoreError``."""
    try:
        yield
    except SQLAlchemyError as e:
        raise StoreError(store_error_message(e)) from e
