"""Unit conversions, numeric coercion and day-key helpers."""

import math
from datetime import date, datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from food_tracker.domain.profile import FeetInches

LBS_TO_KG = 0.45359237
CM_PER_INCH = 2.54
INCHES_PER_FOOT = 12


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up."""
    return math.floor(value + 0.5)


def clamp(value: float, low: float, high: float) -> float:
    """Limit a value to the inclusive range [low, high]."""
    return min(high, max(low, value))


def parse_number(value: object) -> float | None:
    """Return a finite float for numeric input, else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        parsed = float(value)
    elif isinstance(value, str):
        try:
            parsed = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(parsed):
        return None
    return parsed


def to_number(value: object, fallback: float = 0.0) -> float:
    """Coerce a value to a finite float, using fallback otherwise."""
    parsed = parse_number(value)
    return fallback if parsed is None else parsed


def lbs_to_kg(lbs: float) -> float:
    return lbs * LBS_TO_KG


def kg_to_lbs(kg: float) -> float:
    return kg / LBS_TO_KG


def feet_inches_to_cm(feet: float, inches: float) -> float:
    return (feet * INCHES_PER_FOOT + inches) * CM_PER_INCH


def cm_to_feet_inches(cm: float) -> FeetInches:
    """Convert centimeters to feet and inches, inches always in [0, 11]."""
    total_inches = cm / CM_PER_INCH
    feet = math.floor(total_inches / INCHES_PER_FOOT)
    inches = round_half_up(total_inches - feet * INCHES_PER_FOOT)
    if inches >= INCHES_PER_FOOT:
        feet += 1
        inches = 0
    return FeetInches(feet=feet, inches=max(inches, 0))


def parse_timezone(name: str | None) -> ZoneInfo | None:
    """Return a ZoneInfo for a valid name, or None for the system zone."""
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return ZoneInfo("UTC")


def local_datetime(moment: datetime, timezone_name: str | None = None) -> datetime:
    """Express a timestamp in the observer's timezone.

    Naive datetimes are assumed to already be local wall-clock time.
    Moments too close to the edge of the calendar to convert are kept as is.
    """
    if moment.tzinfo is None:
        return moment
    try:
        return moment.astimezone(parse_timezone(timezone_name))
    except OverflowError:
        return moment


def get_day_key(moment: datetime | date, timezone_name: str | None = None) -> str:
    """Return the local calendar day of a timestamp as YYYY-MM-DD."""
    if isinstance(moment, datetime):
        moment = local_datetime(moment, timezone_name).date()
    return moment.isoformat()


def today_in(timezone_name: str | None = None) -> date:
    """Return the current local date for the observer."""
    return datetime.now(tz=parse_timezone(timezone_name)).date()


def parse_timestamp(value: object) -> datetime | None:
    """Parse an ISO-8601 timestamp, accepting a trailing Z."""
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    raw = value.strip()
    if raw.endswith(("Z", "z")):
        raw = f"{raw[:-1]}+00:00"
    try:
        return datetime.fromisoformat(raw)
    except ValueError:
        return None
