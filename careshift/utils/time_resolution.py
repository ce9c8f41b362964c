"""
Calendar helpers for turning weekday sets and "HH:MM" strings into concrete
timestamps.

Shift timestamps are naive wall-clock datetimes in the care plan's local
time; "today" is taken in the configured timezone.
"""
import re
from datetime import date, datetime, time, timedelta
from typing import Dict, Iterable, List, Optional, Tuple
from zoneinfo import ZoneInfo

from careshift.core.config import settings
from careshift.core.exceptions import ParseError, ValidationError
from careshift.models.shared.enums import DayOfWeek

# date.weekday() numbering
DAY_MAP: Dict[DayOfWeek, int] = {
    DayOfWeek.MONDAY: 0,
    DayOfWeek.TUESDAY: 1,
    DayOfWeek.WEDNESDAY: 2,
    DayOfWeek.THURSDAY: 3,
    DayOfWeek.FRIDAY: 4,
    DayOfWeek.SATURDAY: 5,
    DayOfWeek.SUNDAY: 6,
}
WEEK_ORDER: List[DayOfWeek] = sorted(DAY_MAP, key=DAY_MAP.get)

TIME_OF_DAY_PATTERN = re.compile(r'^([01]?\d|2[0-3]):([0-5]\d)$')
TWELVE_HOUR_PATTERN = re.compile(r'^(\d{1,2})(?::([0-5]\d))?\s*([AaPp])\.?[Mm]\.?$')
SCHEDULE_ENTRY_PATTERN = re.compile(
    r'^(?P<days>[A-Za-z][A-Za-z\s&/-]*?)\s+'
    r'(?P<start>\d{1,2}(?::\d{2})?\s*[AaPp]\.?[Mm]\.?)\s*-\s*'
    r'(?P<end>\d{1,2}(?::\d{2})?\s*[AaPp]\.?[Mm]\.?)$'
)


def local_today() -> date:
    """Today's date in the configured timezone."""
    return datetime.now(ZoneInfo(settings.TIMEZONE)).date()


def parse_weekday(value) -> DayOfWeek:
    if isinstance(value, DayOfWeek):
        return value
    try:
        return DayOfWeek(str(value).strip().lower())
    except ValueError:
        raise ParseError(f"Unknown weekday '{value}'")


def normalize_weekdays(days: Iterable) -> List[DayOfWeek]:
    """Parse weekday names, drop duplicates and keep the caller's order."""
    result: List[DayOfWeek] = []
    for day in days or []:
        parsed = parse_weekday(day)
        if parsed not in result:
            result.append(parsed)
    if not result:
        raise ValidationError("At least one weekday is required")
    return result


def next_occurrence(days: Iterable, today: Optional[date] = None) -> date:
    """
    Nearest date on or after ``today`` whose weekday is in ``days``.

    Searches at most one week ahead and falls back to ``today + 7 days``.
    """
    today = today or local_today()
    wanted = {DAY_MAP[d] for d in normalize_weekdays(days)}

    for offset in range(7):
        candidate = today + timedelta(days=offset)
        if candidate.weekday() in wanted:
            return candidate

    return today + timedelta(days=7)


def parse_time_of_day(value: str) -> time:
    """Strict "HH:MM" (24-hour) parser."""
    if not isinstance(value, str):
        raise ParseError(f"Time of day must be a string in HH:MM format, got {value!r}")
    match = TIME_OF_DAY_PATTERN.match(value.strip())
    if not match:
        raise ParseError(f"Invalid time of day '{value}', expected HH:MM")
    return time(int(match.group(1)), int(match.group(2)))


def combine_date_time(day: date, time_of_day: str) -> datetime:
    return datetime.combine(day, parse_time_of_day(time_of_day))


def resolve_end_time(start: datetime, end_time_of_day: str) -> datetime:
    """Place the end time on the start's day, moving it to the next day if it would not come after the start."""
    end = combine_date_time(start.date(), end_time_of_day)
    if end <= start:
        end += timedelta(days=1)
    return end


def resolve_shift_window(day: date, start_time_of_day: str, end_time_of_day: str) -> Tuple[datetime, datetime]:
    start = combine_date_time(day, start_time_of_day)
    return start, resolve_end_time(start, end_time_of_day)


def format_time_of_day(time_of_day: str) -> str:
    """Render '22:00' as '10:00 PM'."""
    parsed = parse_time_of_day(time_of_day)
    period = "PM" if parsed.hour >= 12 else "AM"
    display_hour = parsed.hour % 12 or 12
    return f"{display_hour}:{parsed.minute:02d} {period}"


def format_weekdays(days: Iterable) -> str:
    return ", ".join(d.value.capitalize() for d in normalize_weekdays(days))


def to_24_hour(value: str) -> str:
    """Convert '9 AM' or '9:30pm' to '09:00' or '21:30'."""
    match = TWELVE_HOUR_PATTERN.match(value.strip())
    if not match:
        raise ParseError(f"Invalid 12-hour time '{value}'")
    hour = int(match.group(1))
    minute = int(match.group(2) or 0)
    if not 1 <= hour <= 12:
        raise ParseError(f"Invalid 12-hour time '{value}'")
    hour = hour % 12
    if match.group(3).lower() == "p":
        hour += 12
    return f"{hour:02d}:{minute:02d}"


def _expand_day_range(start_day: DayOfWeek, end_day: DayOfWeek) -> List[DayOfWeek]:
    start_idx = WEEK_ORDER.index(start_day)
    span = (WEEK_ORDER.index(end_day) - start_idx) % 7
    return [WEEK_ORDER[(start_idx + i) % 7] for i in range(span + 1)]


def _parse_days_text(days_text: str) -> List[DayOfWeek]:
    cleaned = re.sub(r'\band\b', '&', days_text.strip(), flags=re.IGNORECASE)
    if '-' in cleaned:
        parts = [p.strip() for p in cleaned.split('-')]
        if len(parts) != 2:
            raise ParseError(f"Invalid day range '{days_text}'")
        return _expand_day_range(parse_weekday(parts[0]), parse_weekday(parts[1]))
    return normalize_weekdays(p for p in re.split(r'[&/]', cleaned) if p.strip())


def parse_custom_schedule_text(text: str) -> List[dict]:
    """
    Parse free text such as "Monday - Friday 9 AM - 5 PM, Saturday 10 AM - 2 PM"
    into custom shift definitions (days, start_time, end_time, title).

    Entries are separated by commas. Day ranges wrap around the week, so
    "Friday - Monday" covers the weekend.
    """
    if not text or not text.strip():
        raise ParseError("Schedule text is empty")

    definitions = []
    for entry in (e.strip() for e in text.split(',')):
        if not entry:
            continue
        match = SCHEDULE_ENTRY_PATTERN.match(entry)
        if not match:
            raise ParseError(f"Could not understand schedule entry '{entry}'")
        definitions.append({
            "days": [d.value for d in _parse_days_text(match.group("days"))],
            "start_time": to_24_hour(match.group("start")),
            "end_time": to_24_hour(match.group("end")),
            "title": f"Custom schedule: {entry}",
        })

    if not definitions:
        raise ParseError("Schedule text is empty")
    return definitions
