"""Dashboard view state for each role.

A view fetches its independent queries concurrently and applies every result
in one step. Unmounting bumps the view's generation so results arriving for an
older generation are dropped instead of overwriting newer state.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, ClassVar, Dict, List, Optional
from uuid import UUID

from ..core import dashboards
from ..core.access import DashboardKind, has_role
from ..core.errors import HubError, PermissionDenied
from ..models.user import UserRole
from ..schemas import (
    AchievementRead,
    AdminStats,
    EventRead,
    FacultyStats,
    PendingAchievementRead,
    PortfolioRead,
    StudentStats,
    UserRead,
)
from .api import HubClient
from .session import SessionStore

logger = logging.getLogger(__name__)


async def gather_all(*awaitables: Awaitable[Any]) -> List[Any]:
    """Await every query; raise the first failure only after all have settled."""

    results = await asyncio.gather(*awaitables, return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return list(results)


class DashboardView:
    """Base class holding loading/error state and the stale-result guard."""

    kind: ClassVar[DashboardKind]

    def __init__(self, client: HubClient, session: SessionStore) -> None:
        self.client = client
        self.session = session
        self.loading = True
        self.error: Optional[str] = None
        self.mounted = False
        self._generation = 0

    @property
    def identity(self) -> Optional[UserRead]:
        return self.session.identity

    def is_current(self, generation: int) -> bool:
        return self.mounted and generation == self._generation

    async def mount(self) -> None:
        self.mounted = True
        self._generation += 1
        await self.refresh()

    def unmount(self) -> None:
        self.mounted = False
        self._generation += 1

    async def refresh(self) -> None:
        """Re-fetch everything the view shows; nothing is cached between loads."""

        if not self.mounted:
            return
        generation = self._generation
        self.loading = True
        self.error = None
        try:
            results = await self._fetch()
        except HubError as exc:
            if self.is_current(generation):
                self.error = exc.detail
                logger.warning("%s dashboard load failed: %s", self.kind.value, exc.detail)
            return
        finally:
            if self.is_current(generation):
                self.loading = False

        if self.is_current(generation):
            self._apply(*results)
        else:
            logger.debug("dropping stale %s dashboard result", self.kind.value)

    async def _fetch(self) -> List[Any]:
        raise NotImplementedError

    def _apply(self, *results: Any) -> None:
        raise NotImplementedError


class StudentDashboardView(DashboardView):
    kind = DashboardKind.STUDENT

    def __init__(self, client: HubClient, session: SessionStore, *, recent_limit: int = 5) -> None:
        super().__init__(client, session)
        self.recent_limit = recent_limit
        self.achievements: List[AchievementRead] = []
        self.events: List[EventRead] = []
        self.portfolio: Optional[PortfolioRead] = None

    async def _fetch(self) -> List[Any]:
        return await gather_all(
            self.client.achievements(),
            self.client.events(),
            self.client.my_portfolio(),
        )

    def _apply(self, achievements, events, portfolio) -> None:
        self.achievements = achievements
        self.events = events
        self.portfolio = portfolio

    @property
    def recent_achievements(self) -> List[AchievementRead]:
        return self.achievements[: self.recent_limit]

    @property
    def stats(self) -> StudentStats:
        return dashboards.student_stats(self.achievements, self.events)

    @property
    def empty_states(self) -> Dict[str, str]:
        return dashboards.student_empty_states(self.achievements, self.events, self.portfolio)


class FacultyDashboardView(DashboardView):
    kind = DashboardKind.FACULTY

    def __init__(self, client: HubClient, session: SessionStore) -> None:
        super().__init__(client, session)
        self.pending: List[PendingAchievementRead] = []
        self.events: List[EventRead] = []
        self.students: List[UserRead] = []
        self.verifications_done = 0

    async def _fetch(self) -> List[Any]:
        return await gather_all(
            self.client.pending_achievements(),
            self.client.events(),
            self.client.verified_students(),
            self.client.reviewed_achievements(),
        )

    def _apply(self, pending, events, students, reviewed) -> None:
        self.pending = pending
        self.events = events
        self.students = students
        self.verifications_done = len(reviewed)

    @property
    def stats(self) -> FacultyStats:
        return dashboards.faculty_stats(self.pending, self.events, self.students, self.verifications_done)

    @property
    def empty_states(self) -> Dict[str, str]:
        return dashboards.faculty_empty_states(self.pending, self.events)

    async def verify(self, achievement_id: UUID, decision: str) -> Optional[HubError]:
        """Send a decision; the item leaves the local queue only once the backend confirms it."""

        if not has_role(self.identity, UserRole.FACULTY):
            exc = PermissionDenied("Only faculty users may verify achievements.")
            self.error = exc.detail
            return exc

        generation = self._generation
        try:
            await self.client.verify_achievement(achievement_id, decision)
        except HubError as exc:
            if self.is_current(generation):
                self.error = exc.detail
            logger.warning("verification of %s failed: %s", achievement_id, exc.detail)
            return exc

        if self.is_current(generation):
            self.pending = [item for item in self.pending if item.id != achievement_id]
            self.verifications_done += 1
            # a refresh started before this decision would bring the item back
            self._generation += 1
            self.loading = False
        return None


class AdminDashboardView(DashboardView):
    kind = DashboardKind.ADMIN

    def __init__(self, client: HubClient, session: SessionStore) -> None:
        super().__init__(client, session)
        self.overview: Optional[AdminStats] = None
        self.achievements: List[AchievementRead] = []

    async def _fetch(self) -> List[Any]:
        return await gather_all(self.client.overview(), self.client.achievements())

    def _apply(self, overview, achievements) -> None:
        self.overview = overview
        self.achievements = achievements

    @property
    def stats(self) -> AdminStats:
        overview = self.overview or AdminStats(
            total_students=0,
            total_faculty=0,
            total_achievements=0,
            total_events=0,
            pending_verifications=0,
        )
        return dashboards.admin_stats(
            overview.total_students,
            overview.total_faculty,
            self.achievements,
            overview.total_events,
        )

    @property
    def achievements_by_category(self) -> Dict[str, int]:
        return dashboards.admin_breakdowns(self.achievements)[0]

    @property
    def achievements_by_status(self) -> Dict[str, int]:
        return dashboards.admin_breakdowns(self.achievements)[1]


VIEWS = {
    DashboardKind.STUDENT: StudentDashboardView,
    DashboardKind.FACULTY: FacultyDashboardView,
    DashboardKind.ADMIN: AdminDashboardView,
}


def build_view(kind: DashboardKind, client: HubClient, session: SessionStore) -> DashboardView:
    return VIEWS[kind](client, session)
