"""The authenticated user performing an operation.

Identity is issued by the external identity provider; the domain only
needs the id and display name for audit stamps, plus the role for the
authorization policy.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from localmarket.domain.exceptions import ValidationError


class UserRole(Enum):
    GUEST = "guest"
    CUSTOMER = "customer"
    EMPLOYEE = "employee"
    MANAGER = "manager"
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"


STAFF_ROLES = frozenset(
    {UserRole.EMPLOYEE, UserRole.MANAGER, UserRole.ADMIN, UserRole.SUPER_ADMIN}
)
SUPERVISOR_ROLES = frozenset({UserRole.MANAGER, UserRole.ADMIN, UserRole.SUPER_ADMIN})


@dataclass(frozen=True)
class Actor:
    id: str
    name: str
    role: UserRole = UserRole.CUSTOMER

    def __post_init__(self) -> None:
        if not self.id or not self.id.strip():
            raise ValidationError("Actor id is required")

    @property
    def is_staff(self) -> bool:
        return self.role in STAFF_ROLES

    @property
    def is_supervisor(self) -> bool:
        return self.role in SUPERVISOR_ROLES
