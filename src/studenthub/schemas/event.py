"""Pydantic schemas for events and participation."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..models.event import EventStatus, ParticipationStatus


class EventCreate(BaseModel):
    """Request body for creating an event."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field("", max_length=4000)
    category: str = Field(..., min_length=1, max_length=64)
    start_date: datetime
    end_date: datetime
    location: str = ""
    max_participants: Optional[int] = Field(None, ge=1)
    status: EventStatus = EventStatus.DRAFT

    @model_validator(mode="after")
    def _dates_ordered(self) -> "EventCreate":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be earlier than start_date.")
        return self


class EventRead(BaseModel):
    """Event response payload."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    description: str
    category: str
    start_date: datetime
    end_date: datetime
    location: str
    created_by: UUID
    institution_id: UUID
    max_participants: Optional[int] = None
    status: EventStatus
    created_at: datetime


class EventStatusUpdate(BaseModel):
    """Requested event lifecycle change."""

    status: EventStatus


class ParticipationRead(BaseModel):
    """Participation response payload."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    event_id: UUID
    student_id: UUID
    status: ParticipationStatus
    achievement_points: Optional[int] = None
    verified_by: Optional[UUID] = None
    created_at: datetime


class ParticipationOutcome(BaseModel):
    """Organiser's record of how a registration turned out."""

    status: ParticipationStatus
    achievement_points: Optional[int] = Field(None, ge=0)
