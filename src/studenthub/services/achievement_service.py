"""Domain logic for logging and listing achievements."""

from __future__ import annotations

from datetime import date
from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.orm import Session, joinedload

from ..core.access import ensure_role
from ..models import Achievement, AchievementCategory, User, UserRole, VerificationStatus


def create_achievement(
    session: Session,
    *,
    student: User,
    title: str,
    category: AchievementCategory,
    date_achieved: date,
    description: str = "",
    points: int = 0,
    evidence_url: Optional[str] = None,
) -> Achievement:
    """Log a new achievement for ``student``; it always starts pending."""

    ensure_role(student, UserRole.STUDENT, action="log achievements")

    achievement = Achievement(
        student_id=student.id,
        title=title.strip(),
        description=description,
        category=category,
        date_achieved=date_achieved,
        points=points,
        evidence_url=evidence_url,
        verification_status=VerificationStatus.PENDING,
        verified_by=None,
    )
    session.add(achievement)
    session.flush()
    session.refresh(achievement)
    return achievement


def list_for_student(session: Session, *, student_id: UUID, limit: Optional[int] = None) -> Sequence[Achievement]:
    """A student's achievements, newest first."""

    stmt = (
        select(Achievement)
        .where(Achievement.student_id == student_id)
        .order_by(Achievement.created_at.desc())
    )
    if limit:
        stmt = stmt.limit(limit)
    return session.execute(stmt).scalars().all()


def list_pending(session: Session) -> Sequence[Achievement]:
    """Achievements awaiting a decision, with their owners loaded for display."""

    stmt = (
        select(Achievement)
        .options(joinedload(Achievement.student))
        .where(Achievement.verification_status == VerificationStatus.PENDING)
        .order_by(Achievement.created_at.desc())
    )
    return session.execute(stmt).scalars().all()


def list_all(session: Session) -> Sequence[Achievement]:
    stmt = select(Achievement).order_by(Achievement.created_at.desc())
    return session.execute(stmt).scalars().all()


def count_verified_by(session: Session, *, verifier_id: UUID) -> int:
    """Number of decisions (either outcome) recorded by a faculty member."""

    stmt = select(func.count(Achievement.id)).where(Achievement.verified_by == verifier_id)
    return session.execute(stmt).scalar_one()


def verified_points_total(session: Session, *, student_id: UUID) -> int:
    stmt = select(func.coalesce(func.sum(Achievement.points), 0)).where(
        Achievement.student_id == student_id,
        Achievement.verification_status == VerificationStatus.VERIFIED,
    )
    return int(session.execute(stmt).scalar_one())


def list_decided_by(session: Session, *, verifier_id: UUID) -> Sequence[Achievement]:
    """Achievements a faculty member has verified or rejected."""

    stmt = (
        select(Achievement)
        .where(Achievement.verified_by == verifier_id)
        .order_by(Achievement.created_at.desc())
    )
    return session.execute(stmt).scalars().all()
