"""Session store: the signed-in identity shared by every view."""

from __future__ import annotations

import inspect
import logging
from typing import Any, Awaitable, Callable, List, Optional, Union

from pydantic import ValidationError

from ..core.errors import AuthError, HubError
from ..schemas import SignUpProfile, UserRead
from .api import HubClient

logger = logging.getLogger(__name__)

Listener = Callable[[Optional[UserRead]], Union[None, Awaitable[None]]]


class SessionStore:
    """Holds the current identity with its loading and error state.

    The store starts unauthenticated with ``loading`` set; ``initialize``
    settles it. It is passed explicitly to the views that need it.
    """

    def __init__(self, client: HubClient, *, min_password_length: int = 6) -> None:
        self.client = client
        self.min_password_length = min_password_length
        self.identity: Optional[UserRead] = None
        self.loading = True
        self.error: Optional[str] = None
        self._listeners: List[Listener] = []

    @property
    def token(self) -> Optional[str]:
        return self.client.token

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` for identity changes; returns an unsubscribe callable."""

        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    async def _notify(self) -> None:
        for listener in list(self._listeners):
            result = listener(self.identity)
            if inspect.isawaitable(result):
                await result

    async def _set_identity(self, identity: Optional[UserRead]) -> None:
        changed = identity != self.identity
        self.identity = identity
        if changed:
            await self._notify()

    def _fail(self, exc: HubError) -> HubError:
        self.error = exc.detail
        return exc

    async def initialize(self, token: Optional[str] = None) -> None:
        """Resolve an existing token into an identity."""

        if token:
            self.client.token = token
        try:
            if self.client.token:
                await self._set_identity(await self.client.me())
        except AuthError:
            self.client.token = None
            await self._set_identity(None)
        except HubError as exc:
            logger.warning("could not restore session: %s", exc.detail)
            self._fail(exc)
        finally:
            self.loading = False

    async def sign_in(self, email: str, password: str) -> Optional[HubError]:
        """Sign in and load the user row; returns the error instead of raising."""

        self.error = None
        self.loading = True
        try:
            await self.client.sign_in(email, password)
            identity = await self.client.me()
        except HubError as exc:
            self.client.token = None
            return self._fail(exc)
        finally:
            self.loading = False
        await self._set_identity(identity)
        return None

    async def sign_up(
        self,
        email: str,
        password: str,
        profile: Union[SignUpProfile, dict[str, Any]],
        *,
        confirm_password: Optional[str] = None,
    ) -> Optional[HubError]:
        """Create a pending account; the store stays signed out."""

        self.error = None
        if confirm_password is not None and password != confirm_password:
            return self._fail(AuthError("Passwords do not match", status_code=400))
        if len(password) < self.min_password_length:
            return self._fail(
                AuthError(f"Password must be at least {self.min_password_length} characters", status_code=400)
            )
        if not isinstance(profile, SignUpProfile):
            try:
                profile = SignUpProfile.model_validate(profile)
            except ValidationError as exc:
                message = "; ".join(error["msg"] for error in exc.errors())
                return self._fail(AuthError(message, status_code=400))

        try:
            await self.client.sign_up(email, password, profile)
        except HubError as exc:
            return self._fail(exc)
        return None

    async def sign_out(self) -> None:
        """Clear the local session first; a failing remote call is only logged."""

        token = self.client.token
        self.client.token = None
        self.error = None
        await self._set_identity(None)
        if not token:
            return
        try:
            await self.client.sign_out(token)
        except HubError as exc:
            logger.warning("remote sign-out failed, local session cleared anyway: %s", exc.detail)
