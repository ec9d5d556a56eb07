"""Error kinds shared by the backend services and the client."""

from __future__ import annotations


class HubError(Exception):
    """Base error carrying a user-facing detail and an HTTP status."""

    status_code = 400

    def __init__(self, detail: str, status_code: int | None = None) -> None:
        super().__init__(detail)
        self.detail = detail
        if status_code is not None:
            self.status_code = status_code


class AuthError(HubError):
    """Bad credentials, sign-up conflict or an invalid session."""

    status_code = 401


class PermissionDenied(HubError):
    """The acting identity does not hold the role an operation requires."""

    status_code = 403


class NotFound(HubError):
    """The target of a mutation does not exist."""

    status_code = 404


class WorkflowError(HubError):
    """A state transition or business rule was violated."""

    status_code = 409


class TransportError(HubError):
    """The backend could not be reached or failed unexpectedly."""

    status_code = 503


ERRORS_BY_STATUS = {
    401: AuthError,
    403: PermissionDenied,
    404: NotFound,
    409: WorkflowError,
}
