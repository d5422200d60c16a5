"""
date_time_helper.py

Helper functions for UTC timestamps used by logging and persistence.
All modules should use ONLY these helpers for date/time logic.
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current UTC time without microseconds."""
    return datetime.now(timezone.utc).replace(microsecond=0)


def utc_now_iso() -> str:
    """
    Returns the current UTC time as an ISO8601 string (YYYY-MM-DDTHH:MM:SS+00:00).
    Used for logging and DB storage.
    """
    return utc_now().isoformat()


def utc_stamp() -> str:
    """Compact UTC stamp for file names, e.g. 20250709T152103123Z."""
    now = datetime.now(timezone.utc)
    return now.strftime("%Y%m%dT%H%M%S") + f"{now.microsecond // 1000:03d}Z"
