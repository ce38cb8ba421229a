"""Schedule Engine for facility maintenance and safety-inspection schedules.

Projects the next due date of a recurring schedule using:
- `datetime.timedelta` for fixed-length periods (daily, weekly, custom days)
- `dateutil.relativedelta` for month/year clamping (Jan 31 + 1 month = Feb 28)

A projection always adds exactly ONE period to the schedule's start date. It
never advances from a previously projected due date, so repeated edits cannot
drift.

IMPORTANT: This module must NOT import from data_builders.py to avoid circular
imports. Only import from const.py, type_defs.py, and utils.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING, ClassVar

from .. import const
from ..utils.dt_utils import (
    TIME_UNIT_DAYS,
    TIME_UNIT_MONTHS,
    TIME_UNIT_YEARS,
    dt_add_interval,
    dt_parse_date,
    dt_today_local,
)

if TYPE_CHECKING:
    from ..type_defs import ScheduleConfig


def parse_custom_days(custom_days: object) -> int | None:
    """Return a positive whole day count, or None when the value is unusable.

    Accepts ints, integral floats (45.0) and numeric strings ("45", "45.0")
    from form inputs. Booleans, fractions and values <= 0 are unusable.
    """
    if isinstance(custom_days, bool) or custom_days is None:
        return None

    value: object = custom_days
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if isinstance(value, float):
        if not value.is_integer():
            return None
        value = int(value)
    if not isinstance(value, int) or value <= 0:
        return None
    return value


def normalize_custom_days(custom_days: object) -> int:
    """Coerce a custom frequency day count, defaulting to 30 when unusable."""
    days = parse_custom_days(custom_days)
    if days is None:
        const.LOGGER.warning(
            "Custom frequency days %r is not a positive integer, using default %d",
            custom_days,
            const.DEFAULT_CUSTOM_FREQUENCY_DAYS,
        )
        return const.DEFAULT_CUSTOM_FREQUENCY_DAYS
    return days


class RecurrenceEngine:
    """Due-date projection for a single schedule configuration.

    Handles all frequency types:
    - Fixed: DAILY, WEEKLY, CUSTOM (N days)
    - Calendar: MONTHLY, QUARTERLY, HALF_YEARLY, ANNUALLY (clamped)
    """

    # Frequency -> (interval unit, count)
    FREQUENCY_INTERVALS: ClassVar[dict[str, tuple[str, int]]] = {
        const.FREQUENCY_DAILY: (TIME_UNIT_DAYS, 1),
        const.FREQUENCY_WEEKLY: (TIME_UNIT_DAYS, const.DAYS_PER_WEEK),
        const.FREQUENCY_MONTHLY: (TIME_UNIT_MONTHS, 1),
        const.FREQUENCY_QUARTERLY: (TIME_UNIT_MONTHS, const.MONTHS_PER_QUARTER),
        const.FREQUENCY_HALF_YEARLY: (TIME_UNIT_MONTHS, const.MONTHS_PER_HALF_YEAR),
        const.FREQUENCY_ANNUALLY: (TIME_UNIT_YEARS, 1),
    }

    # RFC 5545 equivalents for calendar export
    FREQUENCY_TO_RRULE: ClassVar[dict[str, str]] = {
        const.FREQUENCY_DAILY: "FREQ=DAILY;INTERVAL=1",
        const.FREQUENCY_WEEKLY: "FREQ=WEEKLY;INTERVAL=1",
        const.FREQUENCY_MONTHLY: "FREQ=MONTHLY;INTERVAL=1",
        const.FREQUENCY_QUARTERLY: "FREQ=MONTHLY;INTERVAL=3",
        const.FREQUENCY_HALF_YEARLY: "FREQ=MONTHLY;INTERVAL=6",
        const.FREQUENCY_ANNUALLY: "FREQ=YEARLY;INTERVAL=1",
    }

    def __init__(self, config: ScheduleConfig) -> None:
        """Initialize the recurrence engine with configuration.

        Args:
            config: ScheduleConfig TypedDict containing frequency, custom_days,
                    and start_date.

        Note:
            Invalid custom_days values are coerced to 30 (custom frequency only).
            An unparseable start_date leaves the engine unable to project.
        """
        self._config = config
        self._frequency = config.get("frequency", "")

        self._custom_days: int | None = None
        if self._frequency == const.FREQUENCY_CUSTOM:
            self._custom_days = normalize_custom_days(config.get("custom_days"))

        self._start_date: date | None = dt_parse_date(config.get("start_date"))

    @property
    def frequency(self) -> str:
        """Return the configured frequency."""
        return self._frequency

    @property
    def custom_days(self) -> int | None:
        """Return the normalized custom day count (custom frequency only)."""
        return self._custom_days

    def get_next_due_date(self) -> date | None:
        """Project the start date forward by exactly one period.

        Returns:
            Next due date, or None if the start date or frequency is invalid.
        """
        if self._start_date is None:
            const.LOGGER.debug(
                "RecurrenceEngine: No valid start_date provided, cannot calculate"
            )
            return None

        interval = self._get_interval()
        if interval is None:
            const.LOGGER.warning(
                "RecurrenceEngine: Unknown frequency %r, cannot calculate",
                self._frequency,
            )
            return None

        unit, count = interval
        result = dt_add_interval(self._start_date, unit, count)
        const.LOGGER.debug(
            "RecurrenceEngine: %s + %d %s (%s) -> %s",
            self._start_date,
            count,
            unit,
            self._frequency,
            result,
        )
        return result

    def is_overdue(self, today: date | None = None) -> bool:
        """Return True if the projected due date is strictly before today.

        A schedule due today is not overdue.
        """
        next_due = self.get_next_due_date()
        if next_due is None:
            return False
        return next_due < (today or dt_today_local())

    def days_until_due(self, today: date | None = None) -> int | None:
        """Return the number of days until the projected due date.

        Negative values mean the schedule is overdue by that many days.
        """
        next_due = self.get_next_due_date()
        if next_due is None:
            return None
        return (next_due - (today or dt_today_local())).days

    def to_rrule_string(self) -> str:
        """Generate RFC 5545 RRULE string for iCal export.

        Returns:
            RRULE string (e.g., "FREQ=MONTHLY;INTERVAL=3"),
            "FREQ=DAILY;INTERVAL=N" for custom day counts,
            or empty string if not representable.
        """
        if self._frequency == const.FREQUENCY_CUSTOM and self._custom_days:
            return f"FREQ=DAILY;INTERVAL={self._custom_days}"
        return self.FREQUENCY_TO_RRULE.get(self._frequency, "")

    # =========================================================================
    # Private
    # =========================================================================

    def _get_interval(self) -> tuple[str, int] | None:
        """Return (interval unit, count) for the configured frequency."""
        if self._frequency == const.FREQUENCY_CUSTOM:
            return (TIME_UNIT_DAYS, self._custom_days or const.DEFAULT_CUSTOM_FREQUENCY_DAYS)
        return self.FREQUENCY_INTERVALS.get(self._frequency)


# =============================================================================
# Module-level helpers
# =============================================================================


def calculate_next_due_date(
    start_date: str | date | datetime | None,
    frequency: str,
    custom_days: int | str | None = None,
) -> date | None:
    """Project the next due date of a schedule.

    Thin wrapper over RecurrenceEngine for callers that hold plain field
    values rather than a ScheduleConfig.

    Examples:
        calculate_next_due_date("2025-01-15", "monthly") → date(2025, 2, 15)
        calculate_next_due_date("2025-01-31", "monthly") → date(2025, 2, 28)
        calculate_next_due_date("2025-03-01", "custom", 45) → date(2025, 4, 15)
    """
    config: ScheduleConfig = {"frequency": frequency}
    if start_date is not None:
        config["start_date"] = (
            start_date.isoformat()
            if isinstance(start_date, (date, datetime))
            else start_date
        )
    if custom_days is not None:
        config["custom_days"] = custom_days  # type: ignore[typeddict-item]
    return RecurrenceEngine(config).get_next_due_date()


def build_schedule_config(schedule: dict) -> ScheduleConfig:
    """Extract a ScheduleConfig from a schedule dict (wire keys)."""
    config: ScheduleConfig = {
        "frequency": schedule.get(const.DATA_SCHEDULE_FREQUENCY, ""),
    }
    start = schedule.get(const.DATA_SCHEDULE_START_DATE)
    if start is not None:
        parsed = dt_parse_date(start)
        config["start_date"] = parsed.isoformat() if parsed else str(start)
    custom_days = schedule.get(const.DATA_SCHEDULE_CUSTOM_FREQUENCY_DAYS)
    if custom_days is not None:
        config["custom_days"] = custom_days
    return config


def derive_schedule_status(schedule: dict, today: date | None = None) -> str:
    """Return the display status of a schedule.

    An ACTIVE schedule whose nextDueDate is before today is reported as
    OVERDUE; all other statuses pass through unchanged.
    """
    status = schedule.get(const.DATA_SCHEDULE_STATUS, const.SCHEDULE_STATUS_ACTIVE)
    if status != const.SCHEDULE_STATUS_ACTIVE:
        return status

    next_due = dt_parse_date(schedule.get(const.DATA_SCHEDULE_NEXT_DUE_DATE))
    if next_due is None:
        next_due = RecurrenceEngine(build_schedule_config(schedule)).get_next_due_date()
    if next_due is not None and next_due < (today or dt_today_local()):
        return const.SCHEDULE_STATUS_OVERDUE
    return status
