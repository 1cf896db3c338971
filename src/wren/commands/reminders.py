"""Time expression parsing for the reminder command.

Supported forms (case-insensitive):

    5m, 2h, 1d, 30s                 relative offsets
    today, tonight, tomorrow        natural dates
    monday ... sunday
    next week, next month
    in 30 minutes, in 2 hours       descriptive offsets
    14:30, 2:30pm, 9am              absolute clock times (next occurrence)

All functions take ``now`` explicitly and return timezone-aware datetimes in
``now``'s timezone.
"""

import calendar
import re
from datetime import datetime, timedelta

_RELATIVE = re.compile(r"^(\d+)([smhd])$")
_CLOCK_24H = re.compile(r"^(\d{1,2}):(\d{2})$")
_CLOCK_12H = re.compile(r"^(\d{1,2})(?::(\d{2}))?\s?(am|pm)$")
_IN_OFFSET = re.compile(r"^in\s+(\d+)\s+(second|minute|hour|day|week)s?$")

_UNIT_SECONDS = {
    "s": 1,
    "m": 60,
    "h": 60 * 60,
    "d": 24 * 60 * 60,
    "second": 1,
    "minute": 60,
    "hour": 60 * 60,
    "day": 24 * 60 * 60,
    "week": 7 * 24 * 60 * 60,
}

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]

TIME_FORMAT_HELP = """Supported formats:
  • 5m, 2h, 1d (relative time)
  • tomorrow, monday, tonight, next week (natural language)
  • 2:30pm, 14:30, 9am (absolute time)
  • "in 30 minutes", "in 2 hours" (descriptive, quoted)"""


def _at(day: datetime, hour: int, minute: int = 0) -> datetime:
    return day.replace(hour=hour, minute=minute, second=0, microsecond=0)


def parse_relative_time(text: str) -> timedelta | None:
    match = _RELATIVE.match(text.strip().lower())
    if not match:
        return None
    return timedelta(seconds=int(match.group(1)) * _UNIT_SECONDS[match.group(2)])


def parse_absolute_time(text: str, now: datetime) -> datetime | None:
    """Next occurrence of a wall-clock time, rolling to tomorrow if already past."""
    lower = text.strip().lower()
    hours = minutes = None

    match = _CLOCK_24H.match(lower)
    if match:
        hours, minutes = int(match.group(1)), int(match.group(2))
    else:
        match = _CLOCK_12H.match(lower)
        if match:
            hours = int(match.group(1))
            minutes = int(match.group(2)) if match.group(2) else 0
            if hours < 1 or hours > 12:
                return None
            meridiem = match.group(3)
            if meridiem == "pm" and hours != 12:
                hours += 12
            elif meridiem == "am" and hours == 12:
                hours = 0

    if hours is None or not (0 <= hours < 24 and 0 <= minutes < 60):
        return None

    target = _at(now, hours, minutes)
    if target <= now:
        target += timedelta(days=1)
    return target


def _add_month(moment: datetime) -> datetime:
    year, month = (moment.year + 1, 1) if moment.month == 12 else (moment.year, moment.month + 1)
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def parse_natural_date(text: str, now: datetime) -> datetime | None:
    lower = " ".join(text.strip().lower().split())

    if lower == "today":
        return _at(now, now.hour) + timedelta(hours=1)

    if lower == "tomorrow":
        return _at(now + timedelta(days=1), 9)

    if lower == "tonight":
        target = _at(now, 20)
        if target <= now:
            target += timedelta(days=1)
        return target

    if lower in WEEKDAYS:
        days_ahead = WEEKDAYS.index(lower) - now.weekday()
        if days_ahead <= 0:
            days_ahead += 7
        return _at(now + timedelta(days=days_ahead), 9)

    if lower == "next week":
        return _at(now + timedelta(days=7), 9)

    if lower == "next month":
        return _at(_add_month(now), 9)

    match = _IN_OFFSET.match(lower)
    if match:
        return now + timedelta(seconds=int(match.group(1)) * _UNIT_SECONDS[match.group(2)])

    return None


def parse_time_expression(text: str, now: datetime) -> datetime | None:
    """Resolve a reminder time expression, or None if it is not understood."""
    offset = parse_relative_time(text)
    if offset is not None:
        return now + offset

    natural = parse_natural_date(text, now)
    if natural is not None:
        return natural

    return parse_absolute_time(text, now)


def to_epoch_millis(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


def format_clock(moment: datetime) -> str:
    """``2:30 PM`` style twelve-hour clock time."""
    hour = moment.hour % 12 or 12
    meridiem = "AM" if moment.hour < 12 else "PM"
    return f"{hour}:{moment.minute:02d} {meridiem}"


def format_reminder_time(due: datetime, now: datetime) -> str:
    """Human description of a due time relative to ``now``."""
    due_day = due.date()
    if due_day == now.date():
        return f"Today at {format_clock(due)}"
    if due_day == (now + timedelta(days=1)).date():
        return f"Tomorrow at {format_clock(due)}"
    return f"{due.strftime('%b')} {due.day}, {format_clock(due)}"
