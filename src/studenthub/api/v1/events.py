"""Event and registration endpoints."""

from __future__ import annotations

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ...core.access import DashboardKind, select_dashboard
from ...core.config import Settings, get_settings
from ...core.database import get_db
from ...core.errors import HubError, PermissionDenied
from ...models import User, UserRole
from ...schemas import EventCreate, EventRead, EventStatusUpdate, ParticipationOutcome, ParticipationRead
from ...services import event_service
from ..deps import get_current_user, http_error, require_roles

router = APIRouter(prefix="/events", tags=["events"])


@router.get("", response_model=List[EventRead], summary="List events visible to the caller")
def list_events(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> List[EventRead]:
    """Students get upcoming published events of their institution, faculty their
    own events and admins every event."""

    kind = select_dashboard(user)
    if kind is DashboardKind.FACULTY:
        return list(event_service.list_created_by(db, faculty_id=user.id))
    if kind is DashboardKind.ADMIN:
        return list(event_service.list_all(db))
    return list(
        event_service.list_upcoming(
            db,
            institution_id=user.institution_id,
            limit=settings.upcoming_events_limit,
        )
    )


@router.post(
    "",
    response_model=EventRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create an event",
    responses={400: {"description": "Invalid event"}, 403: {"description": "Only faculty may create events"}},
)
def create_event(
    payload: EventCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> EventRead:
    try:
        event = event_service.create_event(
            db,
            creator=user,
            title=payload.title,
            description=payload.description,
            category=payload.category,
            start_date=payload.start_date,
            end_date=payload.end_date,
            location=payload.location,
            max_participants=payload.max_participants,
            status=payload.status,
        )
        db.commit()
        db.refresh(event)
        return event
    except HubError as exc:
        db.rollback()
        raise http_error(exc) from exc


@router.patch("/{event_id}/status", response_model=EventRead, summary="Publish, complete or cancel an event")
def update_event_status(
    event_id: UUID,
    payload: EventStatusUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> EventRead:
    try:
        event = event_service.update_event_status(db, event_id=event_id, status=payload.status, actor=user)
        db.commit()
        db.refresh(event)
        return event
    except HubError as exc:
        db.rollback()
        raise http_error(exc) from exc


@router.get(
    "/{event_id}/participations",
    response_model=List[ParticipationRead],
    summary="Registrations for an event",
)
def list_participations(
    event_id: UUID,
    user: User = Depends(require_roles(UserRole.FACULTY, UserRole.ADMIN, action="view registrations")),
    db: Session = Depends(get_db),
) -> List[ParticipationRead]:
    try:
        event = event_service.get_event(db, event_id)
        if user.role == UserRole.FACULTY.value and event.created_by != user.id:
            raise PermissionDenied("Only the event's organiser may view its registrations.")
        return list(event_service.list_participations(db, event_id=event_id))
    except HubError as exc:
        raise http_error(exc) from exc


@router.post(
    "/{event_id}/participations",
    response_model=ParticipationRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register for an event",
)
def register(
    event_id: UUID,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> ParticipationRead:
    try:
        participation = event_service.register_participation(db, event_id=event_id, student=user)
        db.commit()
        db.refresh(participation)
        return participation
    except HubError as exc:
        db.rollback()
        raise http_error(exc) from exc


@router.patch(
    "/{event_id}/participations/{participation_id}",
    response_model=ParticipationRead,
    summary="Record attendance and points",
)
def record_outcome(
    event_id: UUID,
    participation_id: UUID,
    payload: ParticipationOutcome,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> ParticipationRead:
    try:
        participation = event_service.record_participation_outcome(
            db,
            event_id=event_id,
            participation_id=participation_id,
            status=payload.status,
            achievement_points=payload.achievement_points,
            actor=user,
        )
        db.commit()
        db.refresh(participation)
        return participation
    except HubError as exc:
        db.rollback()
        raise http_error(exc) from exc
