"""
Database models for staffdir (authoritative ORM definitions).

This module defines the SQLAlchemy Base with a naming convention for stable
Alembic autogenerate diffs, and exposes `target_metadata` for Alembic.

Column types stay portable so the same models run on PostgreSQL in
production and SQLite in development and tests.
"""

from datetime import UTC, date, datetime
from uuid import UUID, uuid4

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    Index,
    Integer,
    MetaData,
    Numeric,
    PrimaryKeyConstraint,
    String,
    Text,
    UniqueConstraint,
    Uuid,
    text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# Naming convention for deterministic constraint/index names in Alembic diffs
naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


def utcnow() -> datetime:
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Base class for all database models with type checking support."""

    metadata = MetaData(naming_convention=naming_convention)


class Employees(Base):
    __tablename__ = "employees"
    __table_args__ = (
        PrimaryKeyConstraint("id", name="employees_pkey"),
        CheckConstraint("age >= 0", name="age_non_negative"),
        CheckConstraint("salary >= 0", name="salary_non_negative"),
        Index("idx_employees_class", "class"),
        Index("idx_employees_created_at", "created_at"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, default=uuid4)
    user_id: Mapped[str | None] = mapped_column(String(255))
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    age: Mapped[int] = mapped_column(Integer, nullable=False)
    # Exposed as "class" on the wire; "department" keeps Python attribute access sane
    department: Mapped[str] = mapped_column("class", String(255), nullable=False)
    subjects: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    attendance: Mapped[int] = mapped_column(Integer, nullable=False, server_default=text("0"))
    position: Mapped[str] = mapped_column(String(255), nullable=False)
    salary: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(64))
    address: Mapped[str | None] = mapped_column(Text)
    hire_date: Mapped[date] = mapped_column(Date, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    flagged: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(True), nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(True), nullable=False, default=utcnow, onupdate=utcnow
    )


class UserRoles(Base):
    __tablename__ = "user_roles"
    __table_args__ = (
        PrimaryKeyConstraint("id", name="user_roles_pkey"),
        UniqueConstraint("user_id", name="user_roles_user_id_key"),
        CheckConstraint("role IN ('admin', 'employee')", name="role_valid"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, default=uuid4)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(32), nullable=False, server_default="employee")
    created_at: Mapped[datetime] = mapped_column(DateTime(True), nullable=False, default=utcnow)


target_metadata = Base.metadata

__all__ = ["Base", "Employees", "UserRoles", "target_metadata", "utcnow"]
