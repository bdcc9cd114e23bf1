from __future__ import annotations

from .models import UserIdentity

EMPLOYEE_ROLE = "employee"
EMPLOYEE_RESTRICTED_RESOURCES = frozenset({"employees", "integration"})


def can(user: UserIdentity | None, resource: str | None = None) -> bool:
    if user is None:
        return False
    if user.role == EMPLOYEE_ROLE:
        return resource not in EMPLOYEE_RESTRICTED_RESOURCES
    return True
