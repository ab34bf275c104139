"""ISO 8601 format checks and semantic comparison of date/time strings.

Comparators return a negative number, zero or a positive number like a
classic ``cmp``, or None when either side cannot be interpreted. Callers
treat None as "not comparable", never as a violation.
"""

import math
import re
from datetime import date, datetime, timedelta, timezone
from typing import Any

DATETIME_PATTERN = re.compile(
    r"^(([0-9]{4})(-(0[1-9]|1[0-2])(-(0[1-9]|[12][0-9]|3[01]))?)?)"
    r"(T([01][0-9]|2[0-3])(:[0-5][0-9])(:[0-5][0-9](\.[0-9]{1,3})?)?"
    r"(Z|([+-])([01][0-9]|2[0-3]):?([0-5][0-9]))?)?$"
)

DATE_PATTERN = re.compile(r"^([0-9]{4})(-(0[1-9]|1[0-2])(-(0[1-9]|[12][0-9]|3[01]))?)?$")

TIME_PATTERN = re.compile(r"^([01][0-9]|2[0-3])(:[0-5][0-9])(:[0-5][0-9](\.[0-9]{1,3})?)?$")

TIMEZONE_PATTERN = re.compile(r"^(Z|([+-])([01][0-9]|2[0-3]):?([0-5][0-9]))$")

_TIME_PIECES = re.compile(r"^(\d{2}):(\d{2})(?::(\d{2}))?(?:\.(\d{1,3}))?$")
_DATE_PIECES = re.compile(r"^(\d{4})(?:-(\d{2}))?(?:-(\d{2}))?$")
_ZONE_PIECES = re.compile(r"^([+-])(\d\d):?(\d\d)$")

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_EPOCH_ORDINAL = _EPOCH.toordinal()


def is_iso8601_datetime_string(value: Any) -> bool:
    """Date with optional time and time zone components."""
    return (
        isinstance(value, str)
        and DATETIME_PATTERN.match(value) is not None
        and _to_timestamp(value) is not None
    )


def is_iso8601_date_string(value: Any) -> bool:
    """Date without time or time zone components."""
    return (
        isinstance(value, str)
        and DATE_PATTERN.match(value) is not None
        and _extract_date_pieces(value) is not None
    )


def is_iso8601_time_string(value: Any) -> bool:
    """Time of day without date or time zone components."""
    return isinstance(value, str) and TIME_PATTERN.match(value) is not None


def is_iso8601_timezone_string(value: Any) -> bool:
    return isinstance(value, str) and TIMEZONE_PATTERN.match(value) is not None


def _extract_time_pieces(value: str) -> tuple[int, int, int, int] | None:
    match = _TIME_PIECES.match(value)
    if match is None:
        return None
    hour, minute, second, fraction = match.groups()
    # Fractions have a variable length; "5" means 500ms
    millisecond = int(fraction.ljust(3, "0")) if fraction else 0
    return int(hour), int(minute), int(second or 0), millisecond


def _extract_date_pieces(value: str) -> date | None:
    match = _DATE_PIECES.match(value)
    if match is None:
        return None
    year, month, day = match.groups()
    try:
        return date(int(year), int(month or 1), int(day or 1))
    except ValueError:
        return None


def normalize_timezone(value: str) -> int | None:
    """Convert an ISO 8601 zone designator to minutes offset from UTC."""
    if value == "Z":
        return 0
    match = _ZONE_PIECES.match(value)
    if match is None:
        return None
    sign, hours, minutes = match.groups()
    offset = int(hours) * 60 + int(minutes)
    return offset if sign == "+" else -offset


def _to_timestamp(value: Any) -> float | None:
    """Milliseconds since the Unix epoch, or None if not interpretable."""
    if isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return (value - _EPOCH) / timedelta(milliseconds=1)
    if isinstance(value, date):
        return _to_timestamp(datetime(value.year, value.month, value.day))
    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            return None
        return float(math.floor(value))
    if not isinstance(value, str):
        return None

    date_part, _, time_part = value.partition("T")
    day = _extract_date_pieces(date_part)
    if day is None:
        return None

    # A date alone means midnight UTC; a time without a zone is read as UTC
    offset_minutes = 0
    time_pieces: tuple[int, int, int, int] = (0, 0, 0, 0)
    if time_part:
        separator = max(time_part.find("-"), time_part.find("+"), time_part.find("Z"))
        time_string = time_part[:separator] if separator >= 0 else time_part
        parsed_time = _extract_time_pieces(time_string)
        if parsed_time is None:
            return None
        time_pieces = parsed_time
        if separator >= 0:
            parsed_offset = normalize_timezone(time_part[separator:])
            if parsed_offset is None:
                return None
            offset_minutes = parsed_offset

    # Plain arithmetic; an offset can push the instant past datetime.min or datetime.max
    hour, minute, second, millisecond = time_pieces
    days = day.toordinal() - _EPOCH_ORDINAL
    seconds = days * 86400 + hour * 3600 + (minute - offset_minutes) * 60 + second
    return float(seconds * 1000 + millisecond)


def compare_dates(a: Any, b: Any) -> float | None:
    a_timestamp = _to_timestamp(a)
    b_timestamp = _to_timestamp(b)
    if a_timestamp is None or b_timestamp is None:
        return None
    return a_timestamp - b_timestamp


def compare_times(a: Any, b: Any) -> int | None:
    if not isinstance(a, str) or not isinstance(b, str):
        return None
    a_pieces = _extract_time_pieces(a)
    b_pieces = _extract_time_pieces(b)
    if a_pieces is None or b_pieces is None:
        return None
    return (a_pieces > b_pieces) - (a_pieces < b_pieces)


def compare_timezones(a: Any, b: Any) -> int | None:
    if not isinstance(a, str) or not isinstance(b, str):
        return None
    a_offset = normalize_timezone(a)
    b_offset = normalize_timezone(b)
    if a_offset is None or b_offset is None:
        return None
    return a_offset - b_offset
