"""Read-only operation handlers over the employees relation."""

from __future__ import annotations

import math
from typing import Any

from sqlalchemy import case, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.expression import ColumnElement, UnaryExpression

from ..dbmodels import Employees
from ..errors import NotFound, translate_store_errors
from ..logging import get_logger
from .types import EmployeeStats, Pagination, employee_list_payload, employee_payload
from .variables import (
    EmployeeIdVariables,
    GetEmployeesPaginatedVariables,
    GetEmployeesVariables,
    GetEmployeeStatsVariables,
)

logger = get_logger(__name__)

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10

# Wire sort key -> column
SORT_COLUMNS = {
    "name": Employees.name,
    "email": Employees.email,
    "age": Employees.age,
    "class": Employees.department,
    "attendance": Employees.attendance,
    "position": Employees.position,
    "salary": Employees.salary,
    "hire_date": Employees.hire_date,
    "is_active": Employees.is_active,
    "flagged": Employees.flagged,
    "created_at": Employees.created_at,
    "updated_at": Employees.updated_at,
}


def order_by_clause(sort_by: str | None, ascending: bool | None) -> list[UnaryExpression]:
    """
    Build the ORDER BY for a list query.

    Without a sort key the newest employees come first. With one, ascending
    is the default unless the caller sends ``ascending: false``. Ties are
    broken by id so pages never overlap.
    """
    if sort_by is None:
        return [Employees.created_at.desc(), Employees.id.desc()]

    column = SORT_COLUMNS[sort_by]
    if ascending is False:
        return [column.desc(), Employees.id.desc()]
    return [column.asc(), Employees.id.asc()]


def escape_like(text: str) -> str:
    """Escape LIKE wildcards so the search text matches literally."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def search_condition(search: str) -> ColumnElement[bool]:
    """Case-insensitive substring match on name OR email."""
    pattern = f"%{escape_like(search)}%"
    return or_(
        Employees.name.ilike(pattern, escape="\\"),
        Employees.email.ilike(pattern, escape="\\"),
    )


async def get_employees(session: AsyncSession, variables: GetEmployeesVariables) -> dict[str, Any]:
    """
    List every employee matching the optional equality filters.

    Filters combine with AND; an absent filter does not restrict.
    """
    conditions: list[ColumnElement[bool]] = []
    if variables.department is not None:
        conditions.append(Employees.department == variables.department)
    if variables.is_active is not None:
        conditions.append(Employees.is_active == variables.is_active)
    if variables.flagged is not None:
        conditions.append(Employees.flagged == variables.flagged)

    stmt = (
        select(Employees)
        .where(*conditions)
        .order_by(*order_by_clause(variables.sort_by, variables.ascending))
    )

    with translate_store_errors():
        result = await session.execute(stmt)
        employees = list(result.scalars().all())

    logger.debug("Listed employees", count=len(employees))
    return {"employees": employee_list_payload(employees)}


async def get_employee(session: AsyncSession, variables: EmployeeIdVariables) -> dict[str, Any]:
    """Fetch exactly one employee by id."""
    with translate_store_errors():
        employee = await session.get(Employees, variables.id)

    if employee is None:
        logger.info("Employee not found", employee_id=str(variables.id))
        raise NotFound("Employee not found")

    return {"employee": employee_payload(employee)}


async def get_employees_paginated(
    session: AsyncSession, variables: GetEmployeesPaginatedVariables
) -> dict[str, Any]:
    """
    Return one page of employees plus a pagination summary.

    The total is counted over the filtered set before paging, so
    ``totalPages`` always reflects the whole result.
    """
    page = variables.page or DEFAULT_PAGE
    limit = variables.limit or DEFAULT_PAGE_SIZE
    offset = (page - 1) * limit

    conditions: list[ColumnElement[bool]] = []
    if variables.department is not None:
        conditions.append(Employees.department == variables.department)
    if variables.search is not None:
        conditions.append(search_condition(variables.search))

    count_stmt = select(func.count()).select_from(Employees).where(*conditions)
    page_stmt = (
        select(Employees)
        .where(*conditions)
        .order_by(*order_by_clause(variables.sort_by, variables.ascending))
        .limit(limit)
        .offset(offset)
    )

    with translate_store_errors():
        total = (await session.execute(count_stmt)).scalar_one()
        employees = list((await session.execute(page_stmt)).scalars().all())

    pagination = Pagination(
        total=total,
        page=page,
        limit=limit,
        total_pages=math.ceil(total / limit),
    )

    logger.debug(
        "Listed employee page",
        page=page,
        limit=limit,
        total=total,
        returned=len(employees),
    )
    return {
        "employees": employee_list_payload(employees),
        "pagination": pagination.to_wire(),
    }


async def get_employee_stats(
    session: AsyncSession, variables: GetEmployeeStatsVariables
) -> dict[str, Any]:
    """Headcount, active and flagged counts and mean attendance for the dashboard."""
    stmt = select(
        func.count(Employees.id),
        func.sum(case((Employees.is_active == True, 1), else_=0)),  # noqa: E712
        func.sum(case((Employees.flagged == True, 1), else_=0)),  # noqa: E712
        func.avg(Employees.attendance),
    )
    if variables.department is not None:
        stmt = stmt.where(Employees.department == variables.department)

    with translate_store_errors():
        total, active, flagged, avg_attendance = (await session.execute(stmt)).one()

    stats = EmployeeStats(
        total=total or 0,
        active=active or 0,
        flagged=flagged or 0,
        # Half-up rounding, matching the dashboard's Math.round
        avg_attendance=math.floor(float(avg_attendance) + 0.5) if avg_attendance else 0,
    )
    return {"stats": stats.to_wire()}
