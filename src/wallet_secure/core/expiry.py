"""Expiry classification for insurance policies."""

from __future__ import annotations

from datetime import date, datetime, time

EXPIRED = "expired"
ACTIVE = "active"


def _as_local_datetime(value: date | datetime) -> datetime:
    """Return a naive local datetime; aware values are converted to local time."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone().replace(tzinfo=None)
        return value
    return datetime.combine(value, time.min)


def is_expired(expiry_date: date, now: date | datetime | None = None) -> bool:
    """Return True when the expiry date lies strictly before `now`.

    The expiry date counts from local midnight of that day, so a policy
    expiring today is active at midnight and expired for the rest of the day.
    `now` defaults to the current local time and is never cached; an aware
    `now` is compared after conversion to local time.
    """
    reference = datetime.now() if now is None else _as_local_datetime(now)
    return _as_local_datetime(expiry_date) < reference


def expiry_status(expiry_date: date, now: date | datetime | None = None) -> str:
    """Return "expired" or "active"."""
    return EXPIRED if is_expired(expiry_date, now) else ACTIVE
