"""Pydantic schemas for achievements and their verification."""

from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from ..models.achievement import AchievementCategory
from ..models.user import VerificationStatus
from .user import StudentSummary


class AchievementCreate(BaseModel):
    """Request body for logging an achievement."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field("", max_length=2000)
    category: AchievementCategory
    date_achieved: date
    points: int = Field(0, ge=0, description="Points claimed for the achievement.")
    evidence_url: Optional[str] = Field(None, max_length=2048)


class AchievementRead(BaseModel):
    """Achievement response payload."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    student_id: UUID
    title: str
    description: str
    category: AchievementCategory
    date_achieved: date
    verification_status: VerificationStatus
    verified_by: Optional[UUID] = None
    points: int
    evidence_url: Optional[str] = None
    created_at: datetime


class PendingAchievementRead(AchievementRead):
    """Pending achievement joined with its owner's display data."""

    student: StudentSummary


class VerificationDecision(BaseModel):
    """Faculty decision on a pending achievement."""

    decision: VerificationStatus
