"""Portfolio generation and point totals."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..core.access import ensure_role
from ..models import Portfolio, User, UserRole
from ..utils.datetime import utcnow
from .achievement_service import verified_points_total


def get_for_student(session: Session, *, student_id: UUID) -> Optional[Portfolio]:
    stmt = select(Portfolio).where(Portfolio.student_id == student_id)
    return session.execute(stmt).scalar_one_or_none()


def upsert_portfolio(
    session: Session,
    *,
    student: User,
    title: str,
    description: str = "",
    is_public: bool = False,
) -> Portfolio:
    """Generate the student's portfolio, or update it when one exists."""

    ensure_role(student, UserRole.STUDENT, action="own a portfolio")

    now = utcnow()
    portfolio = get_for_student(session, student_id=student.id)
    if portfolio is None:
        portfolio = Portfolio(student_id=student.id, generated_at=now)
        session.add(portfolio)

    portfolio.title = title.strip()
    portfolio.description = description
    portfolio.is_public = is_public
    portfolio.total_points = verified_points_total(session, student_id=student.id)
    portfolio.updated_at = now
    session.flush()
    session.refresh(portfolio)
    return portfolio


def refresh_total_points(session: Session, *, student_id: UUID) -> Optional[Portfolio]:
    """Recompute the total for a student's portfolio if they have one."""

    portfolio = get_for_student(session, student_id=student_id)
    if portfolio is None:
        return None
    total = verified_points_total(session, student_id=student_id)
    if portfolio.total_points != total:
        portfolio.total_points = total
        portfolio.updated_at = utcnow()
        session.flush()
    return portfolio


def refresh_all_portfolios(session: Session) -> int:
    """Recompute every portfolio total; returns how many changed."""

    changed = 0
    for portfolio in session.execute(select(Portfolio)).scalars().all():
        total = verified_points_total(session, student_id=portfolio.student_id)
        if portfolio.total_points != total:
            portfolio.total_points = total
            portfolio.updated_at = utcnow()
            changed += 1
    session.flush()
    return changed
