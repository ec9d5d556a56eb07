"""Async HTTP client for the hub's Auth and Query API."""

from __future__ import annotations

import logging
from typing import Any, List, Optional
from uuid import UUID

import httpx

from ..core.config import Settings
from ..core.errors import ERRORS_BY_STATUS, AuthError, HubError, TransportError, WorkflowError
from ..schemas import (
    AchievementCreate,
    AchievementRead,
    AdminStats,
    EventCreate,
    EventRead,
    InstitutionRead,
    ParticipationRead,
    PendingAchievementRead,
    PortfolioRead,
    PortfolioUpsert,
    SessionToken,
    SignUpProfile,
    UserRead,
)

logger = logging.getLogger(__name__)

TRANSPORT_FAILURE = "Could not reach the server. Please try again."
SERVER_FAILURE = "The server failed to handle the request. Please try again."


def _detail_of(response: httpx.Response) -> str:
    try:
        detail = response.json().get("detail")
    except ValueError:
        detail = None
    if isinstance(detail, list):
        return "; ".join(str(item.get("msg", item)) for item in detail)
    return str(detail or response.reason_phrase or f"HTTP {response.status_code}")


def error_from_response(response: httpx.Response, *, auth: bool = False) -> HubError:
    """Map an error response onto the hub's error kinds."""

    status = response.status_code
    if status >= 500:
        return TransportError(SERVER_FAILURE, status_code=status)
    detail = _detail_of(response)
    if auth and status in (400, 401, 409, 422):
        return AuthError(detail, status_code=status)
    return ERRORS_BY_STATUS.get(status, WorkflowError)(detail, status_code=status)


class HubClient:
    """Thin async wrapper over the v1 REST API; holds the bearer token."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._http = httpx.AsyncClient(
            base_url=base_url.rstrip("/") + "/api/v1",
            timeout=timeout,
            transport=transport,
        )
        self.token: Optional[str] = None

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> "HubClient":
        return cls(settings.api_url or "", timeout=settings.api_timeout, **kwargs)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "HubClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        token: Optional[str] = None,
        auth: bool = False,
    ) -> Any:
        bearer = token or self.token
        headers = {"Authorization": f"Bearer {bearer}"} if bearer else {}
        try:
            response = await self._http.request(method, path, json=json, headers=headers)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise TransportError(TRANSPORT_FAILURE) from exc
        if response.status_code >= 400:
            raise error_from_response(response, auth=auth)
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    # Auth API

    async def sign_in(self, email: str, password: str) -> SessionToken:
        data = await self._request("POST", "/auth/sign-in", json={"email": email, "password": password}, auth=True)
        session = SessionToken.model_validate(data)
        self.token = session.access_token
        return session

    async def sign_up(self, email: str, password: str, profile: SignUpProfile) -> UserRead:
        payload = {"email": email, "password": password, "profile": profile.model_dump(mode="json")}
        return UserRead.model_validate(await self._request("POST", "/auth/sign-up", json=payload, auth=True))

    async def sign_out(self, token: Optional[str] = None) -> None:
        await self._request("POST", "/auth/sign-out", token=token, auth=True)

    async def me(self) -> UserRead:
        return UserRead.model_validate(await self._request("GET", "/auth/me", auth=True))

    # Query API

    async def institutions(self) -> List[InstitutionRead]:
        return [InstitutionRead.model_validate(row) for row in await self._request("GET", "/institutions")]

    async def achievements(self) -> List[AchievementRead]:
        return [AchievementRead.model_validate(row) for row in await self._request("GET", "/achievements")]

    async def create_achievement(self, payload: AchievementCreate) -> AchievementRead:
        data = await self._request("POST", "/achievements", json=payload.model_dump(mode="json"))
        return AchievementRead.model_validate(data)

    async def pending_achievements(self) -> List[PendingAchievementRead]:
        rows = await self._request("GET", "/achievements/pending")
        return [PendingAchievementRead.model_validate(row) for row in rows]

    async def reviewed_achievements(self) -> List[AchievementRead]:
        return [AchievementRead.model_validate(row) for row in await self._request("GET", "/achievements/reviewed")]

    async def verify_achievement(self, achievement_id: UUID, decision: str) -> AchievementRead:
        data = await self._request(
            "POST",
            f"/achievements/{achievement_id}/verification",
            json={"decision": getattr(decision, "value", decision)},
        )
        return AchievementRead.model_validate(data)

    async def events(self) -> List[EventRead]:
        return [EventRead.model_validate(row) for row in await self._request("GET", "/events")]

    async def create_event(self, payload: EventCreate) -> EventRead:
        return EventRead.model_validate(await self._request("POST", "/events", json=payload.model_dump(mode="json")))

    async def register_for_event(self, event_id: UUID) -> ParticipationRead:
        data = await self._request("POST", f"/events/{event_id}/participations")
        return ParticipationRead.model_validate(data)

    async def verified_students(self) -> List[UserRead]:
        return [UserRead.model_validate(row) for row in await self._request("GET", "/users/students")]

    async def my_portfolio(self) -> Optional[PortfolioRead]:
        data = await self._request("GET", "/portfolio")
        return PortfolioRead.model_validate(data) if data else None

    async def save_portfolio(self, payload: PortfolioUpsert) -> PortfolioRead:
        return PortfolioRead.model_validate(await self._request("PUT", "/portfolio", json=payload.model_dump()))

    async def overview(self) -> AdminStats:
        return AdminStats.model_validate(await self._request("GET", "/stats/overview"))
