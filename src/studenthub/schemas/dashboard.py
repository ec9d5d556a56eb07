"""Role-specific dashboard payloads."""

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from .achievement import AchievementRead, PendingAchievementRead
from .event import EventRead
from .portfolio import PortfolioRead
from .user import UserRead


class StudentStats(BaseModel):
    """Headline counts on the student dashboard."""

    total_achievements: int = Field(..., ge=0)
    verified_achievements: int = Field(..., ge=0)
    total_points: int = Field(..., ge=0)
    upcoming_events: int = Field(..., ge=0)


class FacultyStats(BaseModel):
    """Verification queue and event counts for a faculty member."""

    pending_verifications: int = Field(..., ge=0)
    my_events: int = Field(..., ge=0)
    active_students: int = Field(..., ge=0)
    verifications_done: int = Field(..., ge=0)


class AdminStats(BaseModel):
    """Institution-wide totals for administrators."""

    total_students: int = Field(..., ge=0)
    total_faculty: int = Field(..., ge=0)
    total_achievements: int = Field(..., ge=0)
    total_events: int = Field(..., ge=0)
    pending_verifications: int = Field(..., ge=0)


class StudentDashboardRead(BaseModel):
    """Student view: own achievements, upcoming events and portfolio."""

    kind: Literal["student"] = "student"
    user: UserRead
    stats: StudentStats
    recent_achievements: List[AchievementRead]
    upcoming_events: List[EventRead]
    portfolio: Optional[PortfolioRead] = None
    empty_states: Dict[str, str] = Field(default_factory=dict)


class FacultyDashboardRead(BaseModel):
    """Faculty view: verification queue, own events and institution students."""

    kind: Literal["faculty"] = "faculty"
    user: UserRead
    stats: FacultyStats
    pending_achievements: List[PendingAchievementRead]
    events: List[EventRead]
    students: List[UserRead]
    empty_states: Dict[str, str] = Field(default_factory=dict)


class AdminDashboardRead(BaseModel):
    """Admin view: institution-wide counts and breakdowns."""

    kind: Literal["admin"] = "admin"
    user: UserRead
    stats: AdminStats
    achievements_by_category: Dict[str, int]
    achievements_by_status: Dict[str, int]
