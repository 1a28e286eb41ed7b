"""Audio package."""

from .alarm import AlarmPlayer, ALARM_SECONDS

__all__ = ["AlarmPlayer", "ALARM_SECONDS"]
