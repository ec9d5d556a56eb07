"""Domain logic for events and registrations."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from ..core.access import ensure_role
from ..core.errors import NotFound, PermissionDenied, WorkflowError
from ..models import Event, EventParticipation, EventStatus, ParticipationStatus, User, UserRole
from ..utils.datetime import as_naive_utc, utcnow

STATUS_CHANGES: dict[EventStatus, frozenset[EventStatus]] = {
    EventStatus.DRAFT: frozenset({EventStatus.PUBLISHED, EventStatus.CANCELLED}),
    EventStatus.PUBLISHED: frozenset({EventStatus.COMPLETED, EventStatus.CANCELLED}),
    EventStatus.COMPLETED: frozenset(),
    EventStatus.CANCELLED: frozenset(),
}


def get_event(session: Session, event_id: UUID) -> Event:
    event = session.get(Event, event_id)
    if event is None:
        raise NotFound(f"Event {event_id} not found")
    return event


def _ensure_organiser(event: Event, actor: User) -> None:
    ensure_role(actor, UserRole.FACULTY, action="manage events")
    if event.created_by != actor.id:
        raise PermissionDenied("Only the event's organiser may change it.")


def create_event(
    session: Session,
    *,
    creator: User,
    title: str,
    category: str,
    start_date: datetime,
    end_date: datetime,
    description: str = "",
    location: str = "",
    max_participants: Optional[int] = None,
    status: EventStatus = EventStatus.DRAFT,
) -> Event:
    """Create an event in the organiser's institution."""

    ensure_role(creator, UserRole.FACULTY, action="create events")
    if creator.institution_id is None:
        raise WorkflowError("Faculty account is not linked to an institution.", status_code=400)
    if status not in (EventStatus.DRAFT, EventStatus.PUBLISHED):
        raise WorkflowError("New events must be draft or published.", status_code=400)

    start, end = as_naive_utc(start_date), as_naive_utc(end_date)
    if end < start:
        raise WorkflowError("end_date must not be earlier than start_date.", status_code=400)

    event = Event(
        title=title.strip(),
        description=description,
        category=category,
        start_date=start,
        end_date=end,
        location=location,
        created_by=creator.id,
        institution_id=creator.institution_id,
        max_participants=max_participants,
        status=status,
    )
    session.add(event)
    session.flush()
    session.refresh(event)
    return event


def update_event_status(session: Session, *, event_id: UUID, status: EventStatus, actor: User) -> Event:
    """Advance an event through draft, published, completed or cancelled."""

    event = get_event(session, event_id)
    _ensure_organiser(event, actor)
    if status not in STATUS_CHANGES[event.status]:
        raise WorkflowError(f"Cannot move event from {event.status.value} to {status.value}.")
    event.status = status
    session.flush()
    return event


def list_upcoming(
    session: Session,
    *,
    institution_id: Optional[UUID],
    now: Optional[datetime] = None,
    limit: int = 5,
) -> Sequence[Event]:
    """Published events of an institution that have not started yet, soonest first."""

    if institution_id is None:
        return []
    current = as_naive_utc(now) if now else utcnow()
    stmt = (
        select(Event)
        .where(
            Event.institution_id == institution_id,
            Event.status == EventStatus.PUBLISHED,
            Event.start_date >= current,
        )
        .order_by(Event.start_date.asc())
        .limit(limit)
    )
    return session.execute(stmt).scalars().all()


def list_created_by(session: Session, *, faculty_id: UUID) -> Sequence[Event]:
    stmt = select(Event).where(Event.created_by == faculty_id).order_by(Event.start_date.desc())
    return session.execute(stmt).scalars().all()


def list_all(session: Session) -> Sequence[Event]:
    stmt = select(Event).order_by(Event.start_date.desc())
    return session.execute(stmt).scalars().all()


def count_events(session: Session) -> int:
    return session.execute(select(func.count(Event.id))).scalar_one()


def register_participation(
    session: Session,
    *,
    event_id: UUID,
    student: User,
    now: Optional[datetime] = None,
) -> EventParticipation:
    """Register a student for an upcoming published event of their institution."""

    ensure_role(student, UserRole.STUDENT, action="register for events")
    event = get_event(session, event_id)
    current = as_naive_utc(now) if now else utcnow()

    if event.institution_id != student.institution_id:
        raise PermissionDenied("Event belongs to another institution.")
    if event.status is not EventStatus.PUBLISHED or event.start_date < current:
        raise WorkflowError("Event is not open for registration.")

    existing_stmt = select(EventParticipation).where(
        EventParticipation.event_id == event.id,
        EventParticipation.student_id == student.id,
    )
    if session.execute(existing_stmt).scalar_one_or_none() is not None:
        raise WorkflowError("Student is already registered for this event.")

    if event.max_participants is not None:
        taken_stmt = select(func.count(EventParticipation.id)).where(EventParticipation.event_id == event.id)
        if session.execute(taken_stmt).scalar_one() >= event.max_participants:
            raise WorkflowError("Event is full.")

    participation = EventParticipation(
        event_id=event.id,
        student_id=student.id,
        status=ParticipationStatus.REGISTERED,
    )
    session.add(participation)
    session.flush()
    session.refresh(participation)
    return participation


def record_participation_outcome(
    session: Session,
    *,
    event_id: UUID,
    participation_id: UUID,
    status: ParticipationStatus,
    actor: User,
    achievement_points: Optional[int] = None,
) -> EventParticipation:
    """Organiser marks attendance and awards points for a registration."""

    event = get_event(session, event_id)
    _ensure_organiser(event, actor)

    participation = session.get(EventParticipation, participation_id)
    if participation is None or participation.event_id != event.id:
        raise NotFound(f"Participation {participation_id} not found")

    participation.status = status
    participation.achievement_points = achievement_points
    participation.verified_by = actor.id
    session.flush()
    return participation


def list_participations(session: Session, *, event_id: UUID) -> Sequence[EventParticipation]:
    get_event(session, event_id)
    stmt = (
        select(EventParticipation)
        .where(EventParticipation.event_id == event_id)
        .order_by(EventParticipation.created_at.asc())
    )
    return session.execute(stmt).scalars().all()


def complete_past_events(session: Session, *, now: Optional[datetime] = None) -> int:
    """Mark published events whose end date has passed as completed."""

    current = as_naive_utc(now) if now else utcnow()
    stmt = (
        update(Event)
        .where(Event.status == EventStatus.PUBLISHED, Event.end_date < current)
        .values(status=EventStatus.COMPLETED)
        .execution_options(synchronize_session=False)
    )
    return session.execute(stmt).rowcount
