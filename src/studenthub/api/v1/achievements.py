"""Achievement and verification endpoints."""

from __future__ import annotations

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ...core.access import DashboardKind, select_dashboard
from ...core.database import get_db
from ...core.errors import HubError, PermissionDenied
from ...models import User, UserRole
from ...schemas import AchievementCreate, AchievementRead, PendingAchievementRead, VerificationDecision
from ...services import achievement_service, verification_service
from ..deps import get_current_user, http_error, require_roles

router = APIRouter(prefix="/achievements", tags=["achievements"])


@router.get(
    "",
    response_model=List[AchievementRead],
    summary="List achievements",
)
def list_achievements(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> List[AchievementRead]:
    """Scoped by the caller's dashboard: admins see all achievements, the
    student dashboard (including the unknown-role fallback) sees its own rows."""

    kind = select_dashboard(user)
    if kind is DashboardKind.ADMIN:
        return list(achievement_service.list_all(db))
    if kind is DashboardKind.FACULTY:
        raise http_error(PermissionDenied("Only student or admin users may list achievements."))
    return list(achievement_service.list_for_student(db, student_id=user.id))


@router.post(
    "",
    response_model=AchievementRead,
    status_code=status.HTTP_201_CREATED,
    summary="Log an achievement",
    responses={403: {"description": "Only students may log achievements"}},
)
def create_achievement(
    payload: AchievementCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> AchievementRead:
    """Record an accomplishment; it waits in ``pending`` until faculty decide.

    Example request body::

        {
            "title": "Hackathon winner",
            "description": "First place at the campus hackathon",
            "category": "extracurricular",
            "date_achieved": "2026-03-14",
            "points": 20,
            "evidence_url": "https://example.edu/certificates/42"
        }
    """

    try:
        achievement = achievement_service.create_achievement(
            db,
            student=user,
            title=payload.title,
            description=payload.description,
            category=payload.category,
            date_achieved=payload.date_achieved,
            points=payload.points,
            evidence_url=payload.evidence_url,
        )
        db.commit()
        db.refresh(achievement)
        return achievement
    except HubError as exc:
        db.rollback()
        raise http_error(exc) from exc


@router.get(
    "/pending",
    response_model=List[PendingAchievementRead],
    summary="Verification queue",
)
def list_pending(
    _: User = Depends(require_roles(UserRole.FACULTY, action="review pending achievements")),
    db: Session = Depends(get_db),
) -> List[PendingAchievementRead]:
    """Pending achievements with the owning student's name and student number."""

    return list(achievement_service.list_pending(db))


@router.get(
    "/reviewed",
    response_model=List[AchievementRead],
    summary="Achievements I have decided",
)
def list_reviewed(
    user: User = Depends(require_roles(UserRole.FACULTY, action="review achievements")),
    db: Session = Depends(get_db),
) -> List[AchievementRead]:
    return list(achievement_service.list_decided_by(db, verifier_id=user.id))


@router.post(
    "/{achievement_id}/verification",
    response_model=AchievementRead,
    summary="Verify or reject a pending achievement",
    responses={
        200: {
            "description": "Decision recorded",
            "content": {
                "application/json": {
                    "example": {
                        "id": "44444444-4444-4444-4444-444444444444",
                        "student_id": "aaaaaaaa-aaaa-aaaa-aaaa-aaaaaaaaaaaa",
                        "title": "Hackathon winner",
                        "description": "First place at the campus hackathon",
                        "category": "extracurricular",
                        "date_achieved": "2026-03-14",
                        "verification_status": "verified",
                        "verified_by": "ffffffff-ffff-ffff-ffff-ffffffffffff",
                        "points": 20,
                        "evidence_url": None,
                        "created_at": "2026-03-15T09:00:00",
                    }
                }
            },
        },
        403: {"description": "Only faculty may verify achievements"},
        404: {"description": "Achievement not found"},
        409: {"description": "Achievement already decided"},
    },
)
def verify_achievement(
    achievement_id: UUID,
    payload: VerificationDecision,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> AchievementRead:
    """Record a faculty decision.

    Example request body::

        {"decision": "rejected"}
    """

    try:
        achievement = verification_service.verify(
            db,
            achievement_id=achievement_id,
            decision=payload.decision,
            actor=user,
        )
        db.commit()
        db.refresh(achievement)
        return achievement
    except HubError as exc:
        db.rollback()
        raise http_error(exc) from exc
