"""Simulated clock for demos.

Every helper takes the group's offset explicitly; the stored value on the
group is the only source of truth and is re-read on each page load.
"""
import time
from datetime import datetime, timedelta, timezone
from typing import Optional

MS_PER_MINUTE = 60 * 1000
MS_PER_HOUR = 60 * MS_PER_MINUTE
MS_PER_DAY = 24 * MS_PER_HOUR


def get_demo_timestamp(offset_ms: int = 0) -> int:
    return int(time.time() * 1000) + offset_ms


def get_demo_now(offset_ms: int = 0) -> datetime:
    return datetime.now(timezone.utc) + timedelta(milliseconds=offset_ms)


def format_time_offset(offset_ms: int) -> str:
    if offset_ms <= 0:
        return "Real time"
    total_seconds = offset_ms // 1000
    days = total_seconds // (24 * 60 * 60)
    hours = (total_seconds % (24 * 60 * 60)) // (60 * 60)
    minutes = (total_seconds % (60 * 60)) // 60

    parts = []
    if days:
        parts.append(f"{days}d")
    if hours:
        parts.append(f"{hours}h")
    if minutes:
        parts.append(f"{minutes}m")
    return f"+{' '.join(parts)}" if parts else "Real time"


def skip_to_ms(skip_hours: Optional[float] = None, skip_days: Optional[float] = None) -> int:
    skip = 0.0
    if skip_hours:
        skip += skip_hours * MS_PER_HOUR
    if skip_days:
        skip += skip_days * MS_PER_DAY
    return int(skip)


def compute_due_date(rotation_period_days: int, member_index: int, offset_ms: int = 0,
                     now: Optional[datetime] = None) -> datetime:
    """Due date for the member at member_index in the writing queue.

    Each member writes one rotation period after the previous one, counted
    from the group's simulated "now".
    """
    base = (now or datetime.now(timezone.utc)) + timedelta(milliseconds=offset_ms)
    return base + timedelta(days=rotation_period_days * (member_index + 1))
