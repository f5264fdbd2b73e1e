"""
Result payload types returned by the operation handlers
"""

from datetime import date, datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from ..dbmodels import Employees


class Payload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        """JSON-ready dict using the wire (alias) names."""
        return self.model_dump(mode="json", by_alias=True)


class EmployeeRecord(Payload):
    """Employee as the mobile client sees it."""

    id: UUID
    user_id: str | None
    name: str
    email: str
    age: int
    department: str = Field(alias="class")
    subjects: list[str]
    attendance: int
    position: str
    salary: float
    phone: str | None
    address: str | None
    hire_date: date
    is_active: bool
    flagged: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_row(cls, employee: Employees) -> "EmployeeRecord":
        return cls(
            id=employee.id,
            user_id=employee.user_id,
            name=employee.name,
            email=employee.email,
            age=employee.age,
            department=employee.department,
            subjects=list(employee.subjects or []),
            attendance=employee.attendance,
            position=employee.position,
            salary=employee.salary,
            phone=employee.phone,
            address=employee.address,
            hire_date=employee.hire_date,
            is_active=employee.is_active,
            flagged=employee.flagged,
            created_at=employee.created_at,
            updated_at=employee.updated_at,
        )


class Pagination(Payload):
    total: int
    page: int
    limit: int
    total_pages: int = Field(alias="totalPages")


class EmployeeStats(Payload):
    total: int
    active: int
    flagged: int
    avg_attendance: int = Field(alias="avgAttendance")


def employee_payload(employee: Employees) -> dict[str, Any]:
    return EmployeeRecord.from_row(employee).to_wire()


def employee_list_payload(employees: list[Employees]) -> list[dict[str, Any]]:
    return [employee_payload(employee) for employee in employees]
