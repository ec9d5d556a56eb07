"""Queries over user accounts."""

from __future__ import annotations

from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..core.errors import NotFound
from ..models import User, UserRole, VerificationStatus
from ..utils.datetime import utcnow


def get_user(session: Session, user_id: UUID) -> Optional[User]:
    return session.get(User, user_id)


def list_verified_students(session: Session, *, institution_id: Optional[UUID]) -> Sequence[User]:
    """Verified students of an institution ordered by name."""

    if institution_id is None:
        return []
    stmt = (
        select(User)
        .where(
            User.institution_id == institution_id,
            User.role == UserRole.STUDENT.value,
            User.verification_status == VerificationStatus.VERIFIED,
        )
        .order_by(User.full_name.asc())
    )
    return session.execute(stmt).scalars().all()


def count_users_by_role(session: Session) -> dict[str, int]:
    """Number of accounts per stored role value."""

    stmt = select(User.role, func.count(User.id)).group_by(User.role)
    return {role: int(total) for role, total in session.execute(stmt).all()}


def set_verification_status(session: Session, *, user_id: UUID, status: VerificationStatus) -> User:
    """Record an admin's review of an account."""

    user = session.get(User, user_id)
    if user is None:
        raise NotFound(f"User {user_id} not found")
    user.verification_status = status
    user.updated_at = utcnow()
    session.flush()
    return user
