from __future__ import annotations

from datetime import date, datetime, time
from typing import Union

from ..core.constants import MINUTES_PER_DAY
from ..core.exceptions import ValidationError


def parse_iso_date(value: Union[str, date]) -> date:
    """Parse YYYY-MM-DD string into date."""
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}")


def parse_time_of_day(value: Union[str, time]) -> time:
    """Parse an HH:MM (or HH:MM:SS) string into a time of day."""
    if isinstance(value, time):
        return value
    v = (value or "").strip()
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            return datetime.strptime(v, fmt).time()
        except ValueError:
            continue
    raise ValidationError(f"Invalid time (HH:MM): {value!r}")


def parse_optional_time(value) -> time | None:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return parse_time_of_day(value)


def to_minutes(value: time) -> int:
    """Minutes after midnight, seconds dropped."""
    return value.hour * 60 + value.minute


def format_minute(minute: int) -> str:
    """Render a timeline minute as HH:MM, suffixed with +N for later days."""
    day, rest = divmod(int(minute), MINUTES_PER_DAY)
    text = f"{rest // 60:02d}:{rest % 60:02d}"
    if day > 0:
        text += f"+{day}"
    elif day < 0:
        text += f"{day}"
    return text


def format_time(value: time | None) -> str | None:
    return value.strftime("%H:%M") if value else None


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
