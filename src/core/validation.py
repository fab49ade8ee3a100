"""
Form submission validation and date/time parsing.
"""

from datetime import date, datetime, time
from zoneinfo import ZoneInfo

from core.config import FORM_FIELD_DATE, FORM_FIELD_END_TIME, FORM_FIELD_START_TIME
from models.events import TimeWindow


class InputError(ValueError):
    """The form submission cannot be turned into a time window."""


class MissingFieldError(InputError):
    """A required form field label is absent from the submission."""

    def __init__(self, label: str):
        self.label = label
        super().__init__(f"Missing form field: {label!r}")


class ParseError(InputError):
    """A date or time string does not match its expected format."""

    def __init__(self, field: str, value: str, expected: str):
        self.field = field
        self.value = value
        super().__init__(f"Invalid {field}: {value!r} (expected {expected})")


def extract_form_fields(
    named_values: dict[str, list[str]],
    labels: tuple[str, str, str] = (FORM_FIELD_DATE, FORM_FIELD_START_TIME, FORM_FIELD_END_TIME),
) -> tuple[str, str, str]:
    """
    Read the first value of the date, start time and end time fields.

    Fields are matched by exact label, not by position.

    Raises:
        MissingFieldError: if a label is absent or has no values
    """
    values = []
    for label in labels:
        submitted = named_values.get(label)
        if not submitted:
            raise MissingFieldError(label)
        values.append(submitted[0].strip())
    return values[0], values[1], values[2]


def _to_int(field: str, value: str, token: str, expected: str) -> int:
    token = token.strip()
    if not (token.isascii() and token.isdigit()):
        raise ParseError(field, value, expected)
    return int(token)


def parse_date(date_str: str, field: str = "date") -> date:
    """Parse 'M/D/YYYY' (no zero-padding required)."""
    expected = "M/D/YYYY"
    parts = date_str.strip().split("/")
    if len(parts) != 3:
        raise ParseError(field, date_str, expected)

    month, day, year = (_to_int(field, date_str, p, expected) for p in parts)
    try:
        return date(year, month, day)
    except ValueError:
        raise ParseError(field, date_str, expected)


def parse_time(time_str: str, field: str = "time") -> time:
    """
    Parse a 12-hour clock string 'H:MM:SS AM|PM' into a time.

    12 AM is midnight (hour 0), 12 PM is noon (hour 12). Seconds may be omitted.
    """
    expected = "H:MM:SS AM|PM"
    tokens = time_str.strip().split()
    if len(tokens) != 2:
        raise ParseError(field, time_str, expected)

    clock, modifier = tokens
    modifier = modifier.upper()
    if modifier not in ("AM", "PM"):
        raise ParseError(field, time_str, expected)

    parts = clock.split(":")
    if len(parts) not in (2, 3):
        raise ParseError(field, time_str, expected)
    hour, minute, *rest = (_to_int(field, time_str, p, expected) for p in parts)
    second = rest[0] if rest else 0

    if not 1 <= hour <= 12:
        raise ParseError(field, time_str, expected)
    if modifier == "PM" and hour < 12:
        hour += 12
    if modifier == "AM" and hour == 12:
        hour = 0

    try:
        return time(hour, minute, second)
    except ValueError:
        raise ParseError(field, time_str, expected)


def parse_window(date_str: str, start_str: str, end_str: str, tz: ZoneInfo) -> TimeWindow:
    """Build the requested window from the form's date and start/end times in zone tz."""
    day = parse_date(date_str, field="date")
    start = datetime.combine(day, parse_time(start_str, field="start time"), tzinfo=tz)
    end = datetime.combine(day, parse_time(end_str, field="end time"), tzinfo=tz)
    return TimeWindow(start=start, end=end)
