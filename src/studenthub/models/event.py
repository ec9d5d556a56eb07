"""Institution events and student participation."""

import enum
import uuid

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    Enum as SAEnum,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import relationship

from ..core.database import Base, enum_values
from ..utils.datetime import utcnow


class EventStatus(str, enum.Enum):
    """Publication lifecycle of an event."""

    DRAFT = "draft"
    PUBLISHED = "published"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ParticipationStatus(str, enum.Enum):
    """Outcome of a student's registration."""

    REGISTERED = "registered"
    ATTENDED = "attended"
    COMPLETED = "completed"
    NO_SHOW = "no_show"


class Event(Base):
    """Faculty-organised event scoped to one institution."""

    __tablename__ = "events"
    __table_args__ = (
        CheckConstraint("end_date >= start_date", name="events_dates_ordered"),
        CheckConstraint("max_participants IS NULL OR max_participants > 0", name="events_capacity_positive"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")
    category = Column(String, nullable=False)
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    location = Column(String, nullable=False, default="")
    created_by = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="RESTRICT"), nullable=False)
    institution_id = Column(Uuid(as_uuid=True), ForeignKey("institutions.id", ondelete="RESTRICT"), nullable=False)
    max_participants = Column(Integer)
    status = Column(
        SAEnum(EventStatus, name="event_status", values_callable=enum_values),
        nullable=False,
        default=EventStatus.DRAFT,
    )
    created_at = Column(DateTime, default=utcnow, nullable=False)

    creator = relationship("User", back_populates="events_created")
    institution = relationship("Institution", back_populates="events")
    participations = relationship("EventParticipation", back_populates="event")


class EventParticipation(Base):
    """A student's registration for an event."""

    __tablename__ = "event_participations"
    __table_args__ = (
        UniqueConstraint("event_id", "student_id", name="event_participations_unique"),
        CheckConstraint(
            "achievement_points IS NULL OR achievement_points >= 0",
            name="event_participations_points_non_negative",
        ),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    event_id = Column(Uuid(as_uuid=True), ForeignKey("events.id", ondelete="RESTRICT"), nullable=False)
    student_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="RESTRICT"), nullable=False)
    status = Column(
        SAEnum(ParticipationStatus, name="participation_status", values_callable=enum_values),
        nullable=False,
        default=ParticipationStatus.REGISTERED,
    )
    achievement_points = Column(Integer)
    verified_by = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="RESTRICT"))
    created_at = Column(DateTime, default=utcnow, nullable=False)

    event = relationship("Event", back_populates="participations")
    student = relationship("User", foreign_keys=[student_id], back_populates="participations")
