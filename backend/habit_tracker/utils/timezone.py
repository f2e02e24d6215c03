"""
Timezone Utilities - Centralized timezone handling
"""
from datetime import datetime
import pytz

from habit_tracker.core.config import settings


def get_app_tz():
    """
    Get the configured application timezone

    Returns:
        pytz timezone for settings.APP_TIMEZONE
    """
    return pytz.timezone(settings.APP_TIMEZONE)


def get_now() -> datetime:
    """
    Get current datetime in the application timezone

    Returns:
        Timezone-aware datetime object
    """
    return datetime.now(get_app_tz())


def format_local_date(value: datetime) -> str:
    """
    Format a timestamp as a short date in the application timezone

    Args:
        value: Timezone-aware datetime

    Returns:
        Date string like "2026-10-19"
    """
    return value.astimezone(get_app_tz()).date().isoformat()
