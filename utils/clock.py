"""
utils/clock.py
-----------------
Time helpers. Timestamps are stored as naive UTC datetimes (what
pymongo hands back); calendar days and clock strings are computed in
the attendance timezone (WIB by default).
"""

from datetime import datetime, timezone

import pytz
from flask import current_app, has_app_context

DEFAULT_TIMEZONE = "Asia/Jakarta"


def utcnow():
    """Current UTC time, naive, truncated to milliseconds like MongoDB."""
    now = datetime.now(timezone.utc).replace(tzinfo=None)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


def local_tz():
    name = DEFAULT_TIMEZONE
    if has_app_context():
        name = current_app.config.get("ATTENDANCE_TIMEZONE", DEFAULT_TIMEZONE)
    return pytz.timezone(name)


def to_local(dt, tz=None):
    tz = tz or local_tz()
    if dt.tzinfo is None:
        dt = pytz.utc.localize(dt)
    return dt.astimezone(tz)


def day_key(dt, tz=None):
    """Calendar day (YYYY-MM-DD) of a UTC timestamp in the attendance timezone."""
    return to_local(dt, tz).strftime("%Y-%m-%d")


def format_datetime(dt, tz=None):
    # 17/10/2026, 08.05.03
    return to_local(dt, tz).strftime("%d/%m/%Y, %H.%M.%S")


def format_time(dt, tz=None):
    # 08.05.03
    return to_local(dt, tz).strftime("%H.%M.%S")


def isoformat(dt):
    if dt is None:
        return None
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt.isoformat(timespec="milliseconds") + "Z"
