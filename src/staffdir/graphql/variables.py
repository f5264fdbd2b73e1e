"""
Typed variable models for every operation in the catalog.

Wire names follow the mobile client (``class``, ``isActive``, ``sortBy``);
Python attributes use snake_case. Variable models ignore keys they do not
know so clients may send extra variables, while the employee input models
reject unknown fields.
"""

from __future__ import annotations

from datetime import date
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Employee attributes a list may be ordered by, keyed by their wire name
SORTABLE_FIELDS = frozenset(
    {
        "name",
        "email",
        "age",
        "class",
        "attendance",
        "position",
        "salary",
        "hire_date",
        "is_active",
        "flagged",
        "created_at",
        "updated_at",
    }
)

# Columns that may be cleared with an explicit null in an update
NULLABLE_FIELDS = frozenset({"user_id", "phone", "address"})

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
MAX_PAGE_SIZE = 1000
# Keeps (page - 1) * limit well inside a signed 64-bit OFFSET
MAX_PAGE = 1_000_000_000
# Numeric(12, 2)
MAX_SALARY = 9_999_999_999.99


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class OperationVariables(BaseModel):
    """Base class for operation variable bags."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class SortVariables(OperationVariables):
    sort_by: str | None = Field(default=None, alias="sortBy")
    ascending: bool | None = None

    @field_validator("sort_by", mode="before")
    @classmethod
    def _validate_sort_by(cls, value: Any) -> Any:
        value = _blank_to_none(value)
        if value is not None and value not in SORTABLE_FIELDS:
            raise ValueError(f"cannot sort by '{value}'")
        return value


class DepartmentFilterVariables(OperationVariables):
    # An empty string means "no filter", as the mobile client sends it
    department: str | None = Field(default=None, alias="class")

    @field_validator("department", mode="before")
    @classmethod
    def _blank_department(cls, value: Any) -> Any:
        return _blank_to_none(value)


class GetEmployeesVariables(SortVariables, DepartmentFilterVariables):
    is_active: bool | None = Field(default=None, alias="isActive")
    flagged: bool | None = None


class EmployeeIdVariables(OperationVariables):
    id: UUID


class GetEmployeesPaginatedVariables(SortVariables, DepartmentFilterVariables):
    # 0 and null fall back to the defaults (page 1, limit 10)
    page: int | None = Field(default=None, ge=0, le=MAX_PAGE)
    limit: int | None = Field(default=None, ge=0, le=MAX_PAGE_SIZE)
    search: str | None = None

    @field_validator("search", mode="before")
    @classmethod
    def _blank_search(cls, value: Any) -> Any:
        return _blank_to_none(value)


class GetEmployeeStatsVariables(DepartmentFilterVariables):
    pass


class EmployeeInput(BaseModel):
    """Full field set for a new employee (everything but id and timestamps)."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    user_id: str | None = None
    name: str
    email: str
    age: int = Field(ge=0, le=INT32_MAX)
    department: str = Field(alias="class")
    subjects: list[str] = Field(default_factory=list)
    attendance: int = Field(default=0, ge=INT32_MIN, le=INT32_MAX)
    position: str
    salary: float = Field(ge=0, le=MAX_SALARY)
    phone: str | None = None
    address: str | None = None
    hire_date: date
    is_active: bool = True
    flagged: bool = False


class EmployeePatch(BaseModel):
    """Partial field set for an update; only fields present are written."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    user_id: str | None = None
    name: str | None = None
    email: str | None = None
    age: int | None = Field(default=None, ge=0, le=INT32_MAX)
    department: str | None = Field(default=None, alias="class")
    subjects: list[str] | None = None
    attendance: int | None = Field(default=None, ge=INT32_MIN, le=INT32_MAX)
    position: str | None = None
    salary: float | None = Field(default=None, ge=0, le=MAX_SALARY)
    phone: str | None = None
    address: str | None = None
    hire_date: date | None = None
    is_active: bool | None = None
    flagged: bool | None = None

    @model_validator(mode="after")
    def _reject_null_required_fields(self) -> EmployeePatch:
        for field_name in self.model_fields_set:
            if field_name in NULLABLE_FIELDS or getattr(self, field_name) is not None:
                continue
            alias = type(self).model_fields[field_name].alias or field_name
            raise ValueError(f"'{alias}' cannot be null")
        return self

    def changes(self) -> dict[str, Any]:
        """Attribute values the caller actually sent, keyed by ORM attribute name."""
        return self.model_dump(exclude_unset=True)


class CreateEmployeeVariables(OperationVariables):
    input: EmployeeInput


class UpdateEmployeeVariables(OperationVariables):
    id: UUID
    input: EmployeePatch
