"""
Operation dispatcher: document + variables -> typed handler -> result data.
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from ..auth.context import AuthContext
from ..errors import Forbidden, InvalidDocument, InvalidVariables, UnknownOperation
from ..logging import get_logger, set_operation_context
from .document import OperationKind, parse_operation
from .registry import Operation, OperationRegistry
from .registry import registry as default_registry

logger = get_logger(__name__)

ADMIN_REQUIRED_MESSAGE = "Unauthorized: Admin access required"


def validate_variables(operation: Operation, variables: object) -> Any:
    """
    Validate a raw variables mapping into the operation's typed model.

    Raises:
        InvalidDocument: If variables is not a JSON object
        InvalidVariables: If any variable is missing or has the wrong type
    """
    if variables is None:
        variables = {}
    if not isinstance(variables, dict):
        raise InvalidDocument("Variables must be a JSON object")

    try:
        return operation.variables_model.model_validate(variables)
    except ValidationError as e:
        problems = []
        fields = []
        for error in e.errors():
            location = ".".join(str(part) for part in error["loc"])
            fields.append(location)
            problems.append(f"{location}: {error['msg']}" if location else error["msg"])
        raise InvalidVariables(
            f"Invalid variables for {operation.name}: {'; '.join(problems)}",
            fields=fields,
        ) from e


async def dispatch(
    document: object,
    variables: object,
    auth: AuthContext,
    session: AsyncSession,
    registry: OperationRegistry | None = None,
) -> dict[str, Any]:
    """
    Run the operation named in ``document`` and return its result data.

    Mutations are refused for non-admin callers before the operation is
    looked up, so a non-admin never learns which mutations exist and no
    store access happens.

    Raises:
        InvalidDocument: Unparseable document or malformed variables
        Forbidden: Mutation from a non-admin caller
        UnknownOperation: Name not in the catalog for the document's kind
        NotFound, StoreError: Raised by handlers
    """
    registry = registry or default_registry
    parsed = parse_operation(document)
    set_operation_context(parsed.name)

    if parsed.kind is OperationKind.MUTATION and not auth.is_admin:
        logger.warning(
            "Mutation refused for non-admin caller",
            operation_name=parsed.name,
            role=auth.role.value,
        )
        raise Forbidden(ADMIN_REQUIRED_MESSAGE)

    operation = registry.get(parsed.name)
    if operation is None or operation.kind is not parsed.kind:
        logger.info("Unknown operation", kind=parsed.kind.value, operation_name=parsed.name)
        raise UnknownOperation(f"Unknown {parsed.kind.value}: {parsed.name}")

    typed_variables = validate_variables(operation, variables)

    logger.info("Dispatching operation", kind=operation.kind.value, operation_name=operation.name)
    return await operation.handler(session, typed_variables)
