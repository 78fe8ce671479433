"""Persistent stores."""

from .additivity_log_repository import AdditivityLogRepository

__all__ = ["AdditivityLogRepository"]
