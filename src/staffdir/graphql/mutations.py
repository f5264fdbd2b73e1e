"""
Mutation handlers over the employees relation.

Role gating happens in the dispatcher before any of these run; handlers
assume an admin caller.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import delete, not_, update
from sqlalchemy.ext.asyncio import AsyncSession

from ..dbmodels import Employees, utcnow
from ..errors import NotFound, translate_store_errors
from ..logging import get_logger
from .types import employee_payload
from .variables import CreateEmployeeVariables, EmployeeIdVariables, UpdateEmployeeVariables

logger = get_logger(__name__)


async def create_employee(
    session: AsyncSession, variables: CreateEmployeeVariables
) -> dict[str, Any]:
    """Insert a new employee; id and timestamps are assigned here."""
    employee = Employees(**variables.input.model_dump())
    session.add(employee)

    with translate_store_errors():
        await session.flush()
        await session.refresh(employee)

    logger.info("Employee created", employee_id=str(employee.id))
    return {"employee": employee_payload(employee)}


async def update_employee(
    session: AsyncSession, variables: UpdateEmployeeVariables
) -> dict[str, Any]:
    """Write only the fields present in the input; a missing id is NotFound."""
    with translate_store_errors():
        employee = await session.get(Employees, variables.id)

    if employee is None:
        logger.info("Update of unknown employee", employee_id=str(variables.id))
        raise NotFound("Employee not found")

    changes = variables.input.changes()
    for attribute, value in changes.items():
        setattr(employee, attribute, value)

    with translate_store_errors():
        await session.flush()
        await session.refresh(employee)

    logger.info("Employee updated", employee_id=str(employee.id), fields=sorted(changes))
    return {"employee": employee_payload(employee)}


async def delete_employee(session: AsyncSession, variables: EmployeeIdVariables) -> dict[str, Any]:
    """Hard delete. Deleting an id that does not exist still succeeds."""
    with translate_store_errors():
        result = await session.execute(delete(Employees).where(Employees.id == variables.id))

    logger.info("Employee deleted", employee_id=str(variables.id), rows=result.rowcount)
    return {"success": True}


async def toggle_flag_employee(
    session: AsyncSession, variables: EmployeeIdVariables
) -> dict[str, Any]:
    """
    Flip the employee's ``flagged`` bit.

    The flip is a single conditional UPDATE (``flagged = NOT flagged``) so two
    concurrent toggles always cancel out instead of one being lost.
    """
    stmt = (
        update(Employees)
        .where(Employees.id == variables.id)
        .values(flagged=not_(Employees.flagged), updated_at=utcnow())
        .execution_options(synchronize_session=False)
    )

    with translate_store_errors():
        result = await session.execute(stmt)
        if result.rowcount == 0:
            employee = None
        else:
            employee = await session.get(Employees, variables.id, populate_existing=True)

    if employee is None:
        logger.info("Flag toggle on unknown employee", employee_id=str(variables.id))
        raise NotFound("Employee not found")

    logger.info("Employee flag toggled", employee_id=str(employee.id), flagged=employee.flagged)
    return {"employee": employee_payload(employee)}
