"""GraphQL-style RPC layer: document parsing, operation catalog and dispatch."""

from .dispatcher import dispatch
from .document import OperationKind, ParsedOperation, parse_operation
from .envelope import error_envelope, status_for, success_envelope
from .registry import Operation, OperationRegistry, registry

__all__ = [
    "dispatch",
    "OperationKind",
    "ParsedOperation",
    "parse_operation",
    "error_envelope",
    "status_for",
    "success_envelope",
    "Operation",
    "OperationRegistry",
    "registry",
]
