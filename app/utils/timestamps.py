"""Aware UTC timestamps for created/updated columns and admin session expiry."""

from datetime import datetime, timedelta, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def expires_after(hours: int, now: datetime | None = None) -> datetime:
    """Expiry moment ``hours`` from ``now`` (defaults to the current UTC time)."""
    return (now or utcnow()) + timedelta(hours=hours)
