# File: utils/dt_utils.py
"""Date and time utilities for the facility compliance engine.

Pure Python date/time functions. Uses standard library: datetime, zoneinfo,
plus dateutil for calendar-month arithmetic.

⚠️ UTILS PURITY: NO imports from engines, builders or const.py in this module.

Functions:
    - set_default_timezone / get_default_timezone: Facility timezone
    - dt_today_local: Today's date in the facility timezone
    - dt_parse_date: Normalize date inputs (date, datetime, ISO/US strings)
    - dt_parse_time: Parse HH:MM time-of-day strings
    - dt_combine: Compose a date and a time-of-day into a local datetime
    - dt_add_interval: Add calendar intervals to dates (month clamping)
    - dt_month_start: First day of the month containing a date
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
import logging
import re
from zoneinfo import ZoneInfo

from dateutil.relativedelta import relativedelta

_LOGGER = logging.getLogger(__name__)

# ==============================================================================
# Constants
# ==============================================================================

# Facility timezone, see set_default_timezone()
DEFAULT_TIME_ZONE: ZoneInfo = ZoneInfo("UTC")

# Interval units accepted by dt_add_interval()
TIME_UNIT_DAYS = "days"
TIME_UNIT_WEEKS = "weeks"
TIME_UNIT_MONTHS = "months"
TIME_UNIT_YEARS = "years"

# HH:MM (single-digit hours accepted, e.g. "9:05")
_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")

# Fallback formats for dates typed into older record editors
_DATE_FORMATS = ("%m/%d/%Y", "%d/%m/%Y", "%Y/%m/%d")


# ==============================================================================
# Timezone
# ==============================================================================


def set_default_timezone(tz: ZoneInfo | str) -> None:
    """Configure the facility timezone used to resolve "today".

    Accepts a ZoneInfo or an IANA key such as "Europe/Berlin".
    """
    global DEFAULT_TIME_ZONE  # noqa: PLW0603
    DEFAULT_TIME_ZONE = ZoneInfo(tz) if isinstance(tz, str) else tz


def get_default_timezone() -> ZoneInfo:
    """Return the configured facility timezone."""
    return DEFAULT_TIME_ZONE


def dt_today_local(tz: ZoneInfo | None = None) -> date:
    """Return today's calendar date in the facility timezone.

    Overdue detection and "this month" statistics resolve against this date.
    Pass `tz` to override the configured zone for a single call.
    """
    return datetime.now(tz or DEFAULT_TIME_ZONE).date()


# ==============================================================================
# Parsing
# ==============================================================================


def dt_parse_date(date_input: str | date | datetime | None) -> date | None:
    """Normalize a date input into a `datetime.date`.

    Accepts:
    - date / datetime objects (datetimes keep their date part)
    - "2025-04-07", or an ISO datetime such as "2025-04-07T00:00:00.000Z"
    - "04/07/2025" month-first, then "25/12/2025" day-first, then "2025/04/07"

    Returns:
        The parsed date, or None when nothing matches.
    """
    if isinstance(date_input, datetime):
        return date_input.date()
    if isinstance(date_input, date):
        return date_input
    if not date_input or not isinstance(date_input, str):
        return None

    date_str = date_input.strip()

    try:
        return date.fromisoformat(date_str)
    except ValueError:
        pass

    # Dashboard timestamps ("2025-04-07T00:00:00.000Z")
    try:
        return datetime.fromisoformat(date_str.replace("Z", "+00:00")).date()
    except ValueError:
        pass

    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(date_str, fmt).date()
        except ValueError:
            continue

    _LOGGER.debug("dt_parse_date: could not parse %r", date_input)
    return None


def dt_parse_time(time_input: str | time | None) -> time | None:
    """Parse an HH:MM time-of-day string into a `datetime.time`.

    Seconds ("HH:MM:SS") are tolerated and truncated, matching what HTML time
    inputs send on some browsers.

    Returns:
        datetime.time or None if the value is missing or out of range.

    Example:
        >>> dt_parse_time("22:00")
        datetime.time(22, 0)
    """
    if isinstance(time_input, time):
        return time_input.replace(second=0, microsecond=0)
    if not time_input or not isinstance(time_input, str):
        return None

    raw = time_input.strip()
    if raw.count(":") == 2:
        raw = raw.rsplit(":", 1)[0]

    match = _TIME_PATTERN.match(raw)
    if not match:
        _LOGGER.debug("dt_parse_time: invalid format %r (expected HH:MM)", time_input)
        return None

    hour, minute = int(match.group(1)), int(match.group(2))
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        _LOGGER.debug("dt_parse_time: value out of range %r", time_input)
        return None

    return time(hour, minute)


def dt_combine(
    day: date, time_of_day: time, tz: ZoneInfo | None = None
) -> datetime:
    """Compose a calendar date and a time-of-day into an aware local datetime."""
    tz_info = tz or DEFAULT_TIME_ZONE
    return datetime.combine(day, time_of_day).replace(tzinfo=tz_info)


# ==============================================================================
# Intervals
# ==============================================================================


def dt_add_interval(
    base_date: str | date | datetime,
    interval_unit: str,
    delta: int,
) -> date | None:
    """Return `base_date` moved forward by `delta` interval units.

    Month and year arithmetic clamps to the last valid day instead of
    overflowing into the next month:
        2025-01-31 + 1 month  -> 2025-02-28
        2024-01-31 + 1 month  -> 2024-02-29
        2024-02-29 + 1 year   -> 2025-02-28

    Args:
        base_date: Anything dt_parse_date() accepts
        interval_unit: TIME_UNIT_DAYS, _WEEKS, _MONTHS or _YEARS
        delta: Units to add (negative moves backwards)

    Returns:
        The shifted date, or None for an unparseable base or unknown unit.
    """
    base = dt_parse_date(base_date)
    if base is None:
        _LOGGER.warning("dt_add_interval: unparseable base date %r", base_date)
        return None

    try:
        if interval_unit == TIME_UNIT_DAYS:
            return base + timedelta(days=delta)
        if interval_unit == TIME_UNIT_WEEKS:
            return base + timedelta(weeks=delta)
        if interval_unit == TIME_UNIT_MONTHS:
            return base + relativedelta(months=delta)
        if interval_unit == TIME_UNIT_YEARS:
            return base + relativedelta(years=delta)
    except (ValueError, OverflowError) as exc:
        _LOGGER.warning(
            "dt_add_interval: %s + %d %s out of range: %s",
            base,
            delta,
            interval_unit,
            exc,
        )
        return None

    _LOGGER.warning("dt_add_interval: unknown unit %r", interval_unit)
    return None


def dt_month_start(reference: date) -> date:
    """Return the first day of the month containing `reference`."""
    return reference.replace(day=1)
