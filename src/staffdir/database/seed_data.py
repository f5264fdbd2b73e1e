"""
Reusable seed data functions for database initialization.

Provides role management for the operator CLI and a deterministic set of
demo employees for local development.
"""

from __future__ import annotations

from datetime import date, timedelta

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..auth.context import Role
from ..dbmodels import Employees, UserRoles
from ..logging import get_logger

logger = get_logger(__name__)

DEMO_FIRST_NAMES = [
    "Jordan",
    "Avery",
    "Riley",
    "Morgan",
    "Casey",
    "Quinn",
    "Harper",
    "Rowan",
    "Emerson",
    "Sage",
]
DEMO_LAST_NAMES = ["Lee", "Patel", "Garcia", "Okafor", "Nguyen", "Kowalski", "Silva"]
DEMO_CLASSES = ["Engineering", "Sales", "Support", "Finance", "Design"]
DEMO_POSITIONS = ["Associate", "Specialist", "Senior Specialist", "Lead", "Manager"]
DEMO_SUBJECTS = ["python", "sql", "negotiation", "accounting", "figma", "kubernetes", "writing"]


async def ensure_user_role(db: AsyncSession, user_id: str, role: Role | str) -> UserRoles:
    """
    Create or update the role row for ``user_id``.

    Args:
        db: Database session
        user_id: Identity subject as issued by the identity provider
        role: ``admin`` or ``employee``

    Returns:
        The persisted UserRoles row
    """
    role = Role(role)

    result = await db.execute(select(UserRoles).where(UserRoles.user_id == user_id))
    existing = result.scalar_one_or_none()

    if existing:
        if existing.role != role.value:
            logger.info(
                "Updating user role",
                user_id=user_id,
                old_role=existing.role,
                new_role=role.value,
            )
            existing.role = role.value
            await db.flush()
        return existing

    row = UserRoles(user_id=user_id, role=role.value)
    db.add(row)
    await db.flush()
    logger.info("User role created", user_id=user_id, role=role.value)
    return row


def demo_employee(index: int) -> Employees:
    """Build the ``index``-th demo employee; the same index always yields the same data."""
    first = DEMO_FIRST_NAMES[index % len(DEMO_FIRST_NAMES)]
    last = DEMO_LAST_NAMES[(index // len(DEMO_FIRST_NAMES)) % len(DEMO_LAST_NAMES)]
    name = f"{first} {last}"

    return Employees(
        name=name,
        email=f"{first.lower()}.{last.lower()}{index}@example.com",
        age=22 + (index * 7) % 40,
        department=DEMO_CLASSES[index % len(DEMO_CLASSES)],
        subjects=[
            DEMO_SUBJECTS[index % len(DEMO_SUBJECTS)],
            DEMO_SUBJECTS[(index + 3) % len(DEMO_SUBJECTS)],
        ],
        attendance=60 + (index * 13) % 41,
        position=DEMO_POSITIONS[index % len(DEMO_POSITIONS)],
        salary=float(40_000 + (index * 3_250) % 90_000),
        phone=f"+1-555-{1000 + index:04d}",
        address=f"{100 + index} Market Street",
        hire_date=date(2018, 1, 1) + timedelta(days=index * 37),
        is_active=index % 6 != 5,
        flagged=index % 9 == 4,
    )


async def seed_employees(db: AsyncSession, count: int = 25) -> int:
    """
    Insert ``count`` demo employees.

    Returns:
        Number of rows inserted
    """
    if count <= 0:
        return 0

    db.add_all([demo_employee(i) for i in range(count)])
    await db.flush()

    logger.info("Demo employees seeded", count=count)
    return count
