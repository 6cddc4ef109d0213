"""
Date utility functions for snapshot timestamps.
"""

from datetime import UTC, datetime


def utcnow() -> datetime:
    """
    Return timezone-aware UTC datetime.

    Replaces deprecated datetime.utcnow() which is scheduled for removal in Python 3.14.
    """
    return datetime.now(UTC)


def isoformat_or_none(value: datetime | None) -> str | None:
    """Serialize an optional datetime for status payloads."""
    return value.isoformat() if value is not None else None
