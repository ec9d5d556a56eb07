"""Public schema exports."""

from .achievement import AchievementCreate, AchievementRead, PendingAchievementRead, VerificationDecision
from .dashboard import (
    AdminDashboardRead,
    AdminStats,
    FacultyDashboardRead,
    FacultyStats,
    StudentDashboardRead,
    StudentStats,
)
from .event import EventCreate, EventRead, EventStatusUpdate, ParticipationOutcome, ParticipationRead
from .institution import InstitutionCreate, InstitutionRead
from .portfolio import PortfolioRead, PortfolioUpsert
from .user import (
    SessionToken,
    SignInRequest,
    SignUpProfile,
    SignUpRequest,
    StudentSummary,
    UserRead,
    UserVerificationUpdate,
)

__all__ = [
    "AchievementCreate",
    "AchievementRead",
    "AdminDashboardRead",
    "AdminStats",
    "EventCreate",
    "EventRead",
    "EventStatusUpdate",
    "FacultyDashboardRead",
    "FacultyStats",
    "InstitutionCreate",
    "InstitutionRead",
    "ParticipationOutcome",
    "ParticipationRead",
    "PendingAchievementRead",
    "PortfolioRead",
    "PortfolioUpsert",
    "SessionToken",
    "SignInRequest",
    "SignUpProfile",
    "SignUpRequest",
    "StudentDashboardRead",
    "StudentStats",
    "StudentSummary",
    "UserRead",
    "UserVerificationUpdate",
    "VerificationDecision",
]
