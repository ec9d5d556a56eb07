"""Background scheduler for nightly portfolio and event housekeeping."""

from __future__ import annotations

import logging
from datetime import datetime

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from fastapi import FastAPI
from sqlalchemy.orm import Session

from ..core.config import get_settings
from ..core.database import SessionLocal
from ..services import event_service, portfolio_service
from ..utils.datetime import utcnow

logger = logging.getLogger(__name__)

settings = get_settings()

_scheduler = AsyncIOScheduler(timezone="UTC")


def run_maintenance(session: Session, *, current_time: datetime | None = None) -> dict[str, int]:
    """Recompute portfolio totals and close events that have ended.

    Returns how many rows each step changed.
    """

    return {
        "portfolios_updated": portfolio_service.refresh_all_portfolios(session),
        "events_completed": event_service.complete_past_events(session, now=current_time),
    }


async def _execute_maintenance() -> None:
    session = SessionLocal()
    try:
        summary = run_maintenance(session, current_time=utcnow())
        session.commit()
    except Exception:  # pragma: no cover - background job
        session.rollback()
        logger.exception("nightly maintenance failed, changes rolled back")
        raise
    finally:
        session.close()
    logger.info(
        "nightly maintenance: %d portfolio totals updated, %d events completed",
        summary["portfolios_updated"],
        summary["events_completed"],
    )


@_scheduler.scheduled_job(
    "cron",
    hour=settings.portfolio_refresh_hour,
    minute=0,
    id="nightly_maintenance",
    misfire_grace_time=3600,
)
async def _scheduled_job() -> None:
    await _execute_maintenance()


def register_scheduler(app: FastAPI) -> None:
    """Attach APScheduler lifecycle hooks to the FastAPI app."""

    @app.on_event("startup")
    async def start_scheduler() -> None:
        if not _scheduler.running:
            _scheduler.start()
            job = _scheduler.get_job("nightly_maintenance")
            logger.info("maintenance scheduler started, next run at %s", job.next_run_time if job else None)

    @app.on_event("shutdown")
    async def shutdown_scheduler() -> None:
        if _scheduler.running:
            _scheduler.shutdown(wait=False)
            logger.info("maintenance scheduler stopped")


def run_maintenance_once(current_time: datetime | None = None) -> dict[str, int]:
    """Convenience helper to run the housekeeping synchronously for manual use."""

    session = SessionLocal()
    try:
        summary = run_maintenance(session, current_time=current_time)
        session.commit()
        return summary
    finally:
        session.close()
