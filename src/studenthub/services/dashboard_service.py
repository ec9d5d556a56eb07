"""Role-selected dashboard composition."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Union

from sqlalchemy.orm import Session

from ..core import dashboards
from ..core.access import DashboardKind, select_dashboard
from ..models import User, UserRole
from ..schemas import (
    AchievementRead,
    AdminDashboardRead,
    EventRead,
    FacultyDashboardRead,
    PendingAchievementRead,
    PortfolioRead,
    StudentDashboardRead,
    UserRead,
)
from . import achievement_service, event_service, portfolio_service, user_service

DashboardRead = Union[StudentDashboardRead, FacultyDashboardRead, AdminDashboardRead]


def build_student_dashboard(
    session: Session,
    user: User,
    *,
    now: Optional[datetime] = None,
    upcoming_limit: int = 5,
    recent_limit: int = 5,
) -> StudentDashboardRead:
    achievements = achievement_service.list_for_student(session, student_id=user.id)
    events = event_service.list_upcoming(
        session,
        institution_id=user.institution_id,
        now=now,
        limit=upcoming_limit,
    )
    portfolio = portfolio_service.get_for_student(session, student_id=user.id)

    return StudentDashboardRead(
        user=UserRead.model_validate(user),
        stats=dashboards.student_stats(achievements, events),
        recent_achievements=[AchievementRead.model_validate(a) for a in achievements[:recent_limit]],
        upcoming_events=[EventRead.model_validate(e) for e in events],
        portfolio=PortfolioRead.model_validate(portfolio) if portfolio else None,
        empty_states=dashboards.student_empty_states(achievements, events, portfolio),
    )


def build_faculty_dashboard(session: Session, user: User) -> FacultyDashboardRead:
    pending = achievement_service.list_pending(session)
    events = event_service.list_created_by(session, faculty_id=user.id)
    students = user_service.list_verified_students(session, institution_id=user.institution_id)
    done = achievement_service.count_verified_by(session, verifier_id=user.id)

    return FacultyDashboardRead(
        user=UserRead.model_validate(user),
        stats=dashboards.faculty_stats(pending, events, students, done),
        pending_achievements=[PendingAchievementRead.model_validate(a) for a in pending],
        events=[EventRead.model_validate(e) for e in events],
        students=[UserRead.model_validate(s) for s in students],
        empty_states=dashboards.faculty_empty_states(pending, events),
    )


def build_admin_dashboard(session: Session, user: User) -> AdminDashboardRead:
    by_role = user_service.count_users_by_role(session)
    achievements = achievement_service.list_all(session)
    by_category, by_status = dashboards.admin_breakdowns(achievements)

    return AdminDashboardRead(
        user=UserRead.model_validate(user),
        stats=dashboards.admin_stats(
            by_role.get(UserRole.STUDENT.value, 0),
            by_role.get(UserRole.FACULTY.value, 0),
            achievements,
            event_service.count_events(session),
        ),
        achievements_by_category=by_category,
        achievements_by_status=by_status,
    )


def build_dashboard(
    session: Session,
    user: User,
    *,
    upcoming_limit: int = 5,
    recent_limit: int = 5,
) -> DashboardRead:
    """Build whichever dashboard the user's role selects."""

    kind = select_dashboard(user)
    if kind is DashboardKind.FACULTY:
        return build_faculty_dashboard(session, user)
    if kind is DashboardKind.ADMIN:
        return build_admin_dashboard(session, user)
    return build_student_dashboard(session, user, upcoming_limit=upcoming_limit, recent_limit=recent_limit)
