"""Service layer exports."""

from . import (
	achievement_service,
	auth_service,
	dashboard_service,
	event_service,
	institution_service,
	portfolio_service,
	user_service,
	verification_service,
)

__all__ = [
	"achievement_service",
	"auth_service",
	"dashboard_service",
	"event_service",
	"institution_service",
	"portfolio_service",
	"user_service",
	"verification_service",
]
