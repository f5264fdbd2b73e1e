"""
Initial schema: employees and user_roles.

Revision ID: 20250101_000000_initial_schema
Revises:
Create Date: 2025-01-01 00:00:00
"""

import sqlalchemy as sa

from alembic import op  # type: ignore[reportMissingImports]

# revision identifiers, used by Alembic.
revision = "20250101_000000_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # employees
    op.create_table(
        "employees",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.String(length=255), nullable=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("age", sa.Integer(), nullable=False),
        sa.Column("class", sa.String(length=255), nullable=False),
        sa.Column("subjects", sa.JSON(), nullable=False),
        sa.Column("attendance", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column("position", sa.String(length=255), nullable=False),
        sa.Column("salary", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("phone", sa.String(length=64), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("hire_date", sa.Date(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("flagged", sa.Boolean(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id", name="employees_pkey"),
        sa.CheckConstraint("age >= 0", name="ck_employees_age_non_negative"),
        sa.CheckConstraint("salary >= 0", name="ck_employees_salary_non_negative"),
    )
    op.create_index("idx_employees_class", "employees", ["class"])
    op.create_index("idx_employees_created_at", "employees", ["created_at"])

    # user_roles
    op.create_table(
        "user_roles",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=32), server_default="employee", nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id", name="user_roles_pkey"),
        sa.UniqueConstraint("user_id", name="user_roles_user_id_key"),
        sa.CheckConstraint("role IN ('admin', 'employee')", name="ck_user_roles_role_valid"),
    )


def downgrade() -> None:
    op.drop_table("user_roles")
    op.drop_index("idx_employees_created_at", table_name="employees")
    op.drop_index("idx_employees_class", table_name="employees")
    op.drop_table("employees")
