"""Role-selected dashboard endpoints."""

from __future__ import annotations

from typing import Union

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...core import dashboards
from ...core.config import Settings, get_settings
from ...core.database import get_db
from ...models import User, UserRole
from ...schemas import AdminDashboardRead, AdminStats, FacultyDashboardRead, StudentDashboardRead
from ...services import achievement_service, dashboard_service, event_service, user_service
from ..deps import get_current_user, require_roles

router = APIRouter(tags=["dashboard"])


@router.get(
    "/dashboard",
    response_model=Union[StudentDashboardRead, FacultyDashboardRead, AdminDashboardRead],
    summary="Dashboard for the caller's role",
    responses={
        200: {
            "description": "Student dashboard example",
            "content": {
                "application/json": {
                    "example": {
                        "kind": "student",
                        "user": {
                            "id": "aaaaaaaa-aaaa-aaaa-aaaa-aaaaaaaaaaaa",
                            "email": "alex.rao@example.edu",
                            "full_name": "Alex Rao",
                            "role": "student",
                            "institution_id": "11111111-1111-1111-1111-111111111111",
                            "student_id": "S1001",
                            "department": "Computer Science",
                            "verification_status": "verified",
                            "created_at": "2026-01-10T08:00:00",
                        },
                        "stats": {
                            "total_achievements": 0,
                            "verified_achievements": 0,
                            "total_points": 0,
                            "upcoming_events": 0,
                        },
                        "recent_achievements": [],
                        "upcoming_events": [],
                        "portfolio": None,
                        "empty_states": {
                            "achievements": "No achievements yet. Start adding your accomplishments!",
                            "events": "No upcoming events available.",
                            "portfolio": "No Portfolio Yet",
                        },
                    }
                }
            },
        }
    },
)
def get_dashboard(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Build the dashboard selected by the caller's role; data is fetched fresh on every call."""

    return dashboard_service.build_dashboard(
        db,
        user,
        upcoming_limit=settings.upcoming_events_limit,
        recent_limit=settings.recent_achievements_limit,
    )


@router.get("/stats/overview", response_model=AdminStats, summary="Institution-wide counts")
def overview(
    _: User = Depends(require_roles(UserRole.ADMIN, action="view analytics")),
    db: Session = Depends(get_db),
) -> AdminStats:
    by_role = user_service.count_users_by_role(db)
    return dashboards.admin_stats(
        by_role.get(UserRole.STUDENT.value, 0),
        by_role.get(UserRole.FACULTY.value, 0),
        achievement_service.list_all(db),
        event_service.count_events(db),
    )
