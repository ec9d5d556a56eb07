"""Faculty verification of pending achievements."""

from __future__ import annotations

import logging
from typing import Union
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.orm import Session

from ..core.access import ensure_role
from ..core.errors import NotFound, WorkflowError
from ..core.workflow import check_transition, parse_decision
from ..models import Achievement, User, UserRole, VerificationStatus
from . import portfolio_service

logger = logging.getLogger(__name__)


def verify(
    session: Session,
    *,
    achievement_id: UUID,
    decision: Union[str, VerificationStatus],
    actor: User,
) -> Achievement:
    """Move a pending achievement to ``decision`` on behalf of a faculty member.

    The status check and the write happen in one conditional UPDATE, so two
    reviewers racing on the same achievement cannot both record a decision.
    Decided achievements are left untouched and a ``WorkflowError`` is raised.
    """

    ensure_role(actor, UserRole.FACULTY, action="verify achievements")
    status = parse_decision(decision)

    stmt = (
        update(Achievement)
        .where(
            Achievement.id == achievement_id,
            Achievement.verification_status == VerificationStatus.PENDING,
        )
        .values(verification_status=status, verified_by=actor.id)
        .execution_options(synchronize_session=False)
    )
    result = session.execute(stmt)
    achievement = session.get(Achievement, achievement_id, populate_existing=True)

    if result.rowcount == 0:
        if achievement is None:
            raise NotFound(f"Achievement {achievement_id} not found")
        check_transition(achievement.verification_status, status)
        raise WorkflowError("Achievement could not be updated.")

    logger.info("achievement %s %s by %s", achievement_id, status.value, actor.id)
    if status is VerificationStatus.VERIFIED:
        portfolio_service.refresh_total_points(session, student_id=achievement.student_id)
    return achievement
