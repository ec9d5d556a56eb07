"""Client application shell: owns the session and the active dashboard view."""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from ..core.access import DashboardKind, select_dashboard
from ..core.config import Settings, get_settings, is_backend_configured
from ..schemas import UserRead
from .api import HubClient
from .session import SessionStore
from .views import DashboardView, StudentDashboardView, build_view

logger = logging.getLogger(__name__)


class HubApp:
    """Routes between the landing, auth and dashboard screens.

    Every session change re-runs the dashboard selector; the previous view is
    unmounted before the new one mounts. Without a configured backend the app
    runs in demo mode and never builds a view or issues a request.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.configured = is_backend_configured(self.settings)
        self.client = HubClient.from_settings(self.settings, transport=transport)
        self.session = SessionStore(self.client, min_password_length=self.settings.min_password_length)
        self.view: Optional[DashboardView] = None
        self.kind: Optional[DashboardKind] = None
        self.auth_requested = False
        self._unsubscribe = self.session.subscribe(self._on_session_change)

    @property
    def demo_mode(self) -> bool:
        return not self.configured

    @property
    def screen(self) -> str:
        if self.demo_mode:
            return "setup"
        if self.session.loading:
            return "loading"
        if self.session.identity is None:
            return "auth" if self.auth_requested else "landing"
        return "dashboard"

    async def start(self, token: Optional[str] = None) -> None:
        if self.demo_mode:
            self.session.loading = False
            logger.info("no backend configured, running in demo mode")
            return
        await self.session.initialize(token)

    def show_auth(self) -> None:
        self.auth_requested = True

    async def _on_session_change(self, identity: Optional[UserRead]) -> None:
        kind = select_dashboard(identity)
        if self.view is not None:
            self.view.unmount()
            self.view = None
        self.kind = kind
        if kind is None or self.demo_mode:
            return
        self.auth_requested = False
        self.view = self._build(kind)
        await self.view.mount()

    def _build(self, kind: DashboardKind) -> DashboardView:
        if kind is DashboardKind.STUDENT:
            return StudentDashboardView(
                self.client,
                self.session,
                recent_limit=self.settings.recent_achievements_limit,
            )
        return build_view(kind, self.client, self.session)

    async def aclose(self) -> None:
        self._unsubscribe()
        if self.view is not None:
            self.view.unmount()
        await self.client.aclose()

    async def __aenter__(self) -> "HubApp":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
