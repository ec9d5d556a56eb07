"""SQLAlchemy models for Smart Student Hub."""

from .achievement import Achievement, AchievementCategory
from .auth import AuthCredential, AuthSession
from .event import Event, EventParticipation, EventStatus, ParticipationStatus
from .institution import Institution
from .portfolio import Portfolio
from .user import User, UserRole, VerificationStatus

__all__ = [
    "Achievement",
    "AchievementCategory",
    "AuthCredential",
    "AuthSession",
    "Event",
    "EventParticipation",
    "EventStatus",
    "Institution",
    "ParticipationStatus",
    "Portfolio",
    "User",
    "UserRole",
    "VerificationStatus",
]
