"""Role-based dashboard selection and permission checks."""

from __future__ import annotations

import enum
import logging
from typing import Any, Optional

from ..models.user import UserRole
from ..utils.aggregates import field_value
from .errors import PermissionDenied

logger = logging.getLogger(__name__)


class DashboardKind(str, enum.Enum):
    """Dashboards the hub can render."""

    STUDENT = "student"
    FACULTY = "faculty"
    ADMIN = "admin"


_DASHBOARD_BY_ROLE = {
    UserRole.STUDENT.value: DashboardKind.STUDENT,
    UserRole.FACULTY.value: DashboardKind.FACULTY,
    UserRole.ADMIN.value: DashboardKind.ADMIN,
}


def role_of(identity: Any) -> Optional[str]:
    """Return the identity's role as plain text."""

    role = field_value(identity, "role")
    if isinstance(role, enum.Enum):
        return role.value
    return role


def select_dashboard(identity: Any) -> Optional[DashboardKind]:
    """Pick the dashboard for ``identity``; ``None`` means the landing/auth flow.

    Unknown role values fall back to the student dashboard so a user with
    malformed role data is never locked out.
    """

    if identity is None:
        return None
    role = role_of(identity)
    kind = _DASHBOARD_BY_ROLE.get(role)
    if kind is None:
        logger.warning("unrecognised role %r, falling back to student dashboard", role)
        return DashboardKind.STUDENT
    return kind


def has_role(identity: Any, *roles: UserRole) -> bool:
    if identity is None:
        return False
    return role_of(identity) in {role.value for role in roles}


def ensure_role(identity: Any, *roles: UserRole, action: str = "perform this action") -> None:
    """Raise ``PermissionDenied`` unless ``identity`` holds one of ``roles``."""

    if not has_role(identity, *roles):
        allowed = " or ".join(role.value for role in roles)
        raise PermissionDenied(f"Only {allowed} users may {action}.")
