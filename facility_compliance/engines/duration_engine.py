"""Duration Engine - Pure logic for elapsed time of a maintenance/inspection run.

This engine provides stateless, pure Python functions for:
- Composing completed date + start/end time-of-day into two instants
- Midnight rollover (end <= start means the activity ran past midnight)
- Profile-driven clamping, rounding and plausibility checks

Two policies exist and are selected by DomainProfile, never by domain name:
- Maintenance: tolerant. Missing times recover to the floor, result is
  floor-clamped to 0.1 h and left unrounded.
- Safety: strict. Missing times and overnight spans longer than 12 h raise
  DurationValidationError; result is capped at 24 h and rounded to 2 dp.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import TYPE_CHECKING

from .. import const
from ..utils.dt_utils import dt_combine, dt_parse_date, dt_parse_time
from ..utils.math_utils import round_hours

if TYPE_CHECKING:
    from ..profiles import DomainProfile


class DurationValidationError(Exception):
    """Raised when a strict profile rejects the entered times.

    Attributes:
        field: Form field the user has to correct (startTime, endTime, ...)
        error_key: ERROR_* constant identifying the failure
        hours: Computed span in hours when one could be computed, else None
    """

    def __init__(self, field: str, error_key: str, hours: float | None = None) -> None:
        """Initialize DurationValidationError.

        Args:
            field: Form field the user has to correct
            error_key: ERROR_* constant identifying the failure
            hours: Computed span in hours, if any
        """
        self.field = field
        self.error_key = error_key
        self.hours = hours
        message = const.ERROR_MESSAGES.get(error_key, error_key)
        if hours is not None:
            message = f"{message} (computed {hours:.2f} h)"
        super().__init__(f"{field}: {message}")


class DurationEngine:
    """Pure logic engine for actual-duration calculations.

    All methods are static - no instance state.
    """

    @staticmethod
    def calculate_raw_span(
        day: date, start: time, end: time
    ) -> tuple[float, bool]:
        """Return (elapsed hours, spans_midnight) for two times on one date.

        If the end time is numerically before or equal to the start time the
        activity is assumed to have crossed midnight and 24 h are added.

        Examples:
            22:00 -> 02:00 → (4.0, True)
            09:00 -> 17:30 → (8.5, False)
            08:00 -> 08:00 → (24.0, True)
        """
        start_dt = dt_combine(day, start)
        end_dt = dt_combine(day, end)
        spans_midnight = end_dt <= start_dt
        if spans_midnight:
            end_dt += timedelta(hours=const.HOURS_PER_DAY)
        elapsed = (end_dt - start_dt).total_seconds() / const.SECONDS_PER_HOUR
        return elapsed, spans_midnight

    @staticmethod
    def calculate_duration(
        completed_date: str | date | datetime | None,
        start_time: str | time | None,
        end_time: str | time | None,
        profile: DomainProfile,
    ) -> float:
        """Compute actual duration in hours under the given profile.

        Args:
            completed_date: Date the work was carried out
            start_time: "HH:MM" start time-of-day
            end_time: "HH:MM" end time-of-day
            profile: Duration policy (see profiles.py)

        Returns:
            Duration in hours, always > 0.

        Raises:
            DurationValidationError: Strict profile and missing/malformed times
                                     or an implausible overnight span.
        """
        day = dt_parse_date(completed_date)
        start = dt_parse_time(start_time)
        end = dt_parse_time(end_time)

        problem = DurationEngine._find_input_problem(
            day, start_time, start, end_time, end
        )
        if problem is not None or day is None or start is None or end is None:
            field, error_key = problem or (const.FIELD_BASE, const.ERROR_INVALID_INPUT)
            if profile.strict_validation:
                raise DurationValidationError(field, error_key)
            const.LOGGER.warning(
                "calculate_duration: %s (%s), recovering with floor %s h",
                field,
                error_key,
                profile.min_duration_hours,
            )
            return DurationEngine._apply_bounds(0.0, profile)

        hours, spans_midnight = DurationEngine.calculate_raw_span(day, start, end)

        if (
            spans_midnight
            and profile.max_overnight_hours is not None
            and hours > profile.max_overnight_hours
        ):
            const.LOGGER.debug(
                "calculate_duration: overnight span %.2f h exceeds %.2f h limit",
                hours,
                profile.max_overnight_hours,
            )
            raise DurationValidationError(
                const.FIELD_END_TIME, const.ERROR_OVERNIGHT_SPAN_TOO_LONG, hours
            )

        result = DurationEngine._apply_bounds(hours, profile)
        const.LOGGER.debug(
            "calculate_duration: %s %s-%s -> %s h (%s profile)",
            day,
            start,
            end,
            result,
            profile.domain,
        )
        return result

    # =========================================================================
    # Private
    # =========================================================================

    @staticmethod
    def _find_input_problem(
        day: date | None,
        raw_start: object,
        start: time | None,
        raw_end: object,
        end: time | None,
    ) -> tuple[str, str] | None:
        """Return (field, error_key) for the first unusable input, or None."""
        if day is None:
            return const.FIELD_COMPLETED_DATE, const.ERROR_INVALID_COMPLETED_DATE
        if start is None:
            if raw_start in (None, ""):
                return const.FIELD_START_TIME, const.ERROR_START_TIME_REQUIRED
            return const.FIELD_START_TIME, const.ERROR_INVALID_TIME_FORMAT
        if end is None:
            if raw_end in (None, ""):
                return const.FIELD_END_TIME, const.ERROR_END_TIME_REQUIRED
            return const.FIELD_END_TIME, const.ERROR_INVALID_TIME_FORMAT
        return None

    @staticmethod
    def _apply_bounds(hours: float, profile: DomainProfile) -> float:
        """Apply floor, ceiling and rounding from the profile.

        Raises:
            DurationValidationError: Result is not positive and the profile
                                     has no floor to recover with.
        """
        if profile.min_duration_hours is not None:
            hours = max(hours, profile.min_duration_hours)
        if profile.max_duration_hours is not None:
            hours = min(hours, profile.max_duration_hours)
        if profile.duration_precision is not None:
            hours = round_hours(hours, profile.duration_precision)

        if hours <= 0:
            raise DurationValidationError(
                const.FIELD_END_TIME, const.ERROR_NON_POSITIVE_DURATION, hours
            )
        return hours
