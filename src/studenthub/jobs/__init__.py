"""Scheduled background jobs."""

from .maintenance import register_scheduler, run_maintenance, run_maintenance_once

__all__ = ["register_scheduler", "run_maintenance", "run_maintenance_once"]
