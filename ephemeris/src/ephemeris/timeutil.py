"""Civil date/time and timezone resolution to UTC instants and Julian Days."""

from __future__ import annotations

import logging
import re
from datetime import UTC, date, datetime, time, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import swisseph as swe
from shefa.errors import ErrorKind, InvalidInputError, Result
from timezonefinder import TimezoneFinder

logger = logging.getLogger(__name__)

# Noon if the birth time is unknown
DEFAULT_TIME = time(12, 0, 0)

# Common abbreviations -> fixed UTC offset in minutes. IST is India.
TZ_ABBREVIATIONS: dict[str, int] = {
    "UTC": 0,
    "GMT": 0,
    "Z": 0,
    "WET": 0,
    "WEST": 60,
    "BST": 60,
    "CET": 60,
    "CEST": 120,
    "EET": 120,
    "EEST": 180,
    "SAST": 120,
    "MSK": 180,
    "IDT": 180,
    "IST": 330,
    "SGT": 480,
    "HKT": 480,
    "AWST": 480,
    "JST": 540,
    "KST": 540,
    "ACST": 570,
    "AEST": 600,
    "AEDT": 660,
    "NZST": 720,
    "NZDT": 780,
    "HST": -600,
    "AKST": -540,
    "AKDT": -480,
    "PST": -480,
    "PDT": -420,
    "MST": -420,
    "MDT": -360,
    "CST": -360,
    "CDT": -300,
    "EST": -300,
    "EDT": -240,
    "AST": -240,
    "BRT": -180,
    "ART": -180,
}

_OFFSET_RE = re.compile(r"^(?:UTC|GMT)?\s*([+-])\s*(\d{1,2})(?::?(\d{2}))?$", re.IGNORECASE)

_finder: TimezoneFinder | None = None


def _get_finder() -> TimezoneFinder:
    global _finder
    if _finder is None:
        _finder = TimezoneFinder(in_memory=True)
    return _finder


def _fixed_offset(minutes: int) -> tzinfo:
    if minutes == 0:
        return UTC
    return timezone(timedelta(minutes=minutes))


def resolve_timezone(label: str | None) -> Result[tzinfo]:
    """Resolve an IANA zone, abbreviation, or fixed offset.

    Unknown labels resolve to UTC with an ``unsupported_timezone`` issue.
    """
    result: Result[tzinfo] = Result(value=UTC)
    text = (label or "").strip()
    if not text:
        result.add_issue(ErrorKind.UNSUPPORTED_TIMEZONE, "timezone", "no timezone given, using UTC")
        logger.warning("No timezone given, falling back to UTC")
        return result

    abbreviation = TZ_ABBREVIATIONS.get(text.upper())
    if abbreviation is not None:
        result.value = _fixed_offset(abbreviation)
        return result

    match = _OFFSET_RE.match(text)
    if match:
        sign, hours, minutes = match.groups()
        total = int(hours) * 60 + int(minutes or 0)
        if total <= 14 * 60:
            result.value = _fixed_offset(-total if sign == "-" else total)
            return result

    try:
        result.value = ZoneInfo(text)
        return result
    except (ZoneInfoNotFoundError, ValueError):
        pass

    logger.warning("Unknown timezone '%s', falling back to UTC", text)
    result.add_issue(
        ErrorKind.UNSUPPORTED_TIMEZONE,
        "timezone",
        f"unknown timezone '{text}', fallback to UTC",
    )
    return result


def timezone_label(tz: tzinfo) -> str:
    if isinstance(tz, ZoneInfo):
        return tz.key
    if tz is UTC:
        return "UTC"
    return str(tz)


def parse_civil_date(date_str: str | None) -> date:
    text = (date_str or "").strip()
    if not text:
        raise InvalidInputError("birth_date", "birth_date is required")
    try:
        return date.fromisoformat(text)
    except ValueError as exc:
        raise InvalidInputError("birth_date", f"birth_date '{text}' is not a YYYY-MM-DD date") from exc


def parse_civil_time(time_str: str | None) -> time | None:
    """Parse HH:MM or HH:MM:SS; ``None`` for an empty value."""
    text = (time_str or "").strip()
    if not text:
        return None
    try:
        parsed = time.fromisoformat(text)
    except ValueError as exc:
        raise InvalidInputError("birth_time", f"birth_time '{text}' is not an HH:MM time") from exc
    return parsed.replace(tzinfo=None)


def resolve_utc_instant(
    date_str: str | None,
    time_str: str | None,
    timezone_label_or_offset: str | None,
) -> Result[datetime]:
    """Resolve civil date/time in a zone to an absolute UTC instant.

    Daylight-saving rules are those in force on the date itself. An empty
    time means noon.

    Raises:
        InvalidInputError: If the date or time is missing or malformed.
    """
    civil_date = parse_civil_date(date_str)
    civil_time = parse_civil_time(time_str) or DEFAULT_TIME
    tz_result = resolve_timezone(timezone_label_or_offset)
    local = datetime.combine(civil_date, civil_time, tzinfo=tz_result.value)
    return Result(value=local.astimezone(UTC), issues=list(tz_result.issues))


def infer_timezone(latitude: float, longitude: float) -> str | None:
    """Infer the IANA timezone for the given coordinates."""
    finder = _get_finder()
    timezone_name = finder.timezone_at(lng=longitude, lat=latitude)
    if not timezone_name:
        timezone_name = finder.certain_timezone_at(lng=longitude, lat=latitude)
    if not timezone_name:
        return None

    normalized = str(timezone_name).strip()
    try:
        ZoneInfo(normalized)
    except (ZoneInfoNotFoundError, ValueError):
        return None
    return normalized


def datetime_to_jd(dt: datetime) -> float:
    """Convert an aware datetime to a Julian Day (UT)."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    utc = dt.astimezone(UTC)
    return swe.julday(
        utc.year,
        utc.month,
        utc.day,
        utc.hour + utc.minute / 60.0 + (utc.second + utc.microsecond / 1e6) / 3600.0,
    )
