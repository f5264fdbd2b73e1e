"""
Operation registry: the catalog of named queries and mutations.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from ..logging import get_logger
from . import mutations, queries
from .document import OperationKind
from .variables import (
    CreateEmployeeVariables,
    EmployeeIdVariables,
    GetEmployeesPaginatedVariables,
    GetEmployeesVariables,
    GetEmployeeStatsVariables,
    UpdateEmployeeVariables,
)

logger = get_logger(__name__)

Handler = Callable[[AsyncSession, Any], Awaitable[dict[str, Any]]]


@dataclass(frozen=True)
class Operation:
    """One named entry of the catalog."""

    name: str
    kind: OperationKind
    variables_model: type[BaseModel]
    handler: Handler
    result_keys: tuple[str, ...]

    @property
    def is_mutation(self) -> bool:
        return self.kind is OperationKind.MUTATION


class OperationRegistry:
    """
    Name-indexed catalog of operations.

    Names are unique across queries and mutations.
    """

    def __init__(self):
        self._operations: dict[str, Operation] = {}

    def register(self, operation: Operation) -> None:
        """
        Register an operation.

        Raises:
            ValueError: If an operation with the same name is already registered
        """
        if operation.name in self._operations:
            raise ValueError(f"Operation '{operation.name}' is already registered")
        self._operations[operation.name] = operation

    def get(self, name: str) -> Operation | None:
        return self._operations.get(name)

    def list_by_kind(self, kind: OperationKind) -> list[Operation]:
        return [op for op in self._operations.values() if op.kind is kind]

    def list_names(self) -> list[str]:
        return list(self._operations.keys())

    def validate(self) -> None:
        """
        Check the catalog is complete and well formed.

        Raises:
            ValueError: On a malformed entry or an incomplete catalog
        """
        for op in self._operations.values():
            if not op.name.isidentifier():
                raise ValueError(f"Operation name '{op.name}' is not a valid identifier")
            if not isinstance(op.kind, OperationKind):
                raise ValueError(f"Operation '{op.name}' has an invalid kind: {op.kind!r}")
            if not op.result_keys:
                raise ValueError(f"Operation '{op.name}' declares no result keys")
            if not issubclass(op.variables_model, BaseModel):
                raise ValueError(f"Operation '{op.name}' variables must be a pydantic model")
            if not callable(op.handler):
                raise ValueError(f"Operation '{op.name}' handler is not callable")

        query_count = len(self.list_by_kind(OperationKind.QUERY))
        mutation_count = len(self.list_by_kind(OperationKind.MUTATION))
        if query_count != 4 or mutation_count != 4:
            raise ValueError(
                f"Expected 4 queries and 4 mutations, found {query_count} and {mutation_count}"
            )

        logger.debug("Operation registry validated", operations=self.list_names())

    def __len__(self) -> int:
        return len(self._operations)

    def __contains__(self, name: str) -> bool:
        return name in self._operations


def build_registry() -> OperationRegistry:
    """Build the employee directory catalog."""
    registry = OperationRegistry()

    # Queries
    registry.register(
        Operation(
            name="GetEmployees",
            kind=OperationKind.QUERY,
            variables_model=GetEmployeesVariables,
            handler=queries.get_employees,
            result_keys=("employees",),
        )
    )
    registry.register(
        Operation(
            name="GetEmployee",
            kind=OperationKind.QUERY,
            variables_model=EmployeeIdVariables,
            handler=queries.get_employee,
            result_keys=("employee",),
        )
    )
    registry.register(
        Operation(
            name="GetEmployeesPaginated",
            kind=OperationKind.QUERY,
            variables_model=GetEmployeesPaginatedVariables,
            handler=queries.get_employees_paginated,
            result_keys=("employees", "pagination"),
        )
    )
    registry.register(
        Operation(
            name="GetEmployeeStats",
            kind=OperationKind.QUERY,
            variables_model=GetEmployeeStatsVariables,
            handler=queries.get_employee_stats,
            result_keys=("stats",),
        )
    )

    # Mutations
    registry.register(
        Operation(
            name="CreateEmployee",
            kind=OperationKind.MUTATION,
            variables_model=CreateEmployeeVariables,
            handler=mutations.create_employee,
            result_keys=("employee",),
        )
    )
    registry.register(
        Operation(
            name="UpdateEmployee",
            kind=OperationKind.MUTATION,
            variables_model=UpdateEmployeeVariables,
            handler=mutations.update_employee,
            result_keys=("employee",),
        )
    )
    registry.register(
        Operation(
            name="DeleteEmployee",
            kind=OperationKind.MUTATION,
            variables_model=EmployeeIdVariables,
            handler=mutations.delete_employee,
            result_keys=("success",),
        )
    )
    registry.register(
        Operation(
            name="ToggleFlagEmployee",
            kind=OperationKind.MUTATION,
            variables_model=EmployeeIdVariables,
            handler=mutations.toggle_flag_employee,
            result_keys=("employee",),
        )
    )

    return registry


# Global registry instance
registry = build_registry()
