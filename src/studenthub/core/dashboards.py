"""Dashboard summaries derived from fetched rows."""

from __future__ import annotations

from typing import Any, Optional, Sequence

from ..models.user import VerificationStatus
from ..schemas.dashboard import AdminStats, FacultyStats, StudentStats
from ..utils.aggregates import category_histogram, count, count_where, field_equals, sum_of

NO_ACHIEVEMENTS = "No achievements yet. Start adding your accomplishments!"
NO_UPCOMING_EVENTS = "No upcoming events available."
NO_PORTFOLIO = "No Portfolio Yet"
NO_PENDING_VERIFICATIONS = "No pending verifications."
NO_EVENTS_CREATED = "No events created yet."

is_verified = field_equals("verification_status", VerificationStatus.VERIFIED)
is_pending = field_equals("verification_status", VerificationStatus.PENDING)


def student_stats(achievements: Sequence[Any], upcoming_events: Sequence[Any]) -> StudentStats:
    return StudentStats(
        total_achievements=count(achievements),
        verified_achievements=count_where(achievements, is_verified),
        total_points=sum_of(achievements, "points"),
        upcoming_events=count(upcoming_events),
    )


def student_empty_states(
    achievements: Sequence[Any],
    upcoming_events: Sequence[Any],
    portfolio: Optional[Any],
) -> dict[str, str]:
    """Messages for each student section that has nothing to show."""

    states = {}
    if not achievements:
        states["achievements"] = NO_ACHIEVEMENTS
    if not upcoming_events:
        states["events"] = NO_UPCOMING_EVENTS
    if portfolio is None:
        states["portfolio"] = NO_PORTFOLIO
    return states


def faculty_stats(
    pending: Sequence[Any],
    events: Sequence[Any],
    students: Sequence[Any],
    verifications_done: int,
) -> FacultyStats:
    return FacultyStats(
        pending_verifications=count(pending),
        my_events=count(events),
        active_students=count(students),
        verifications_done=verifications_done,
    )


def faculty_empty_states(pending: Sequence[Any], events: Sequence[Any]) -> dict[str, str]:
    states = {}
    if not pending:
        states["pending_achievements"] = NO_PENDING_VERIFICATIONS
    if not events:
        states["events"] = NO_EVENTS_CREATED
    return states


def admin_stats(
    total_students: int,
    total_faculty: int,
    achievements: Sequence[Any],
    total_events: int,
) -> AdminStats:
    return AdminStats(
        total_students=total_students,
        total_faculty=total_faculty,
        total_achievements=count(achievements),
        total_events=total_events,
        pending_verifications=count_where(achievements, is_pending),
    )


def admin_breakdowns(achievements: Sequence[Any]) -> tuple[dict[str, int], dict[str, int]]:
    """Category and verification-status histograms for the admin charts."""

    return (
        category_histogram(achievements, "category"),
        category_histogram(achievements, "verification_status"),
    )
