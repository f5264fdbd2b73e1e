"""Authentication context for request handling."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .adapters.base import Principal


class Role(str, Enum):
    """Binary authorization level attached to a verified identity."""

    ADMIN = "admin"
    EMPLOYEE = "employee"

    @classmethod
    def parse(cls, value: str | None) -> Role:
        """Map a stored role string to a Role, treating anything unknown as employee."""
        if value == cls.ADMIN.value:
            return cls.ADMIN
        return cls.EMPLOYEE


@dataclass(frozen=True)
class AuthContext:
    """Runtime authentication context for a request."""

    user_id: str
    role: Role
    principal: Principal
    token: str

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    @property
    def provider(self) -> str:
        """Get the authentication provider name."""
        return self.principal["provider"]
