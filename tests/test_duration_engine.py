"""Unit tests for DurationEngine - pure Python logic tests.

Test Categories:
- Same-day spans
- Midnight rollover
- Maintenance floor and tolerant recovery
- Safety cap, rounding and strict rejection
- DurationValidationError attributes and message
"""

from __future__ import annotations

import dataclasses
from datetime import date, time
import logging

import pytest

from facility_compliance import const
from facility_compliance.engines.duration_engine import (
    DurationEngine,
    DurationValidationError,
)
from facility_compliance.profiles import DomainProfile, build_profile

# =============================================================================
# Test: DurationValidationError
# =============================================================================


class TestDurationValidationError:
    """Tests for the DurationValidationError exception."""

    def test_error_attributes(self) -> None:
        """Error captures field, key and computed hours."""
        error = DurationValidationError(
            const.FIELD_END_TIME, const.ERROR_OVERNIGHT_SPAN_TOO_LONG, 13.0
        )

        assert error.field == const.FIELD_END_TIME
        assert error.error_key == const.ERROR_OVERNIGHT_SPAN_TOO_LONG
        assert error.hours == 13.0

    def test_error_message(self) -> None:
        """Message names the field and the computed span."""
        error = DurationValidationError(
            const.FIELD_END_TIME, const.ERROR_OVERNIGHT_SPAN_TOO_LONG, 13.0
        )

        message = str(error)
        assert message.startswith("endTime:")
        assert "13.00 h" in message

    def test_error_without_hours(self) -> None:
        """Missing-input errors carry no hours."""
        error = DurationValidationError(
            const.FIELD_START_TIME, const.ERROR_START_TIME_REQUIRED
        )

        assert error.hours is None
        assert "Start time is required" in str(error)


# =============================================================================
# Test: Raw span
# =============================================================================


class TestRawSpan:
    """calculate_raw_span() before any profile policy."""

    def test_same_day(self) -> None:
        """09:00 → 17:30 is 8.5 h without rollover."""
        hours, spans_midnight = DurationEngine.calculate_raw_span(
            date(2025, 1, 15), time(9, 0), time(17, 30)
        )

        assert hours == 8.5
        assert spans_midnight is False

    def test_overnight(self) -> None:
        """22:00 → 02:00 rolls over to 4 h."""
        hours, spans_midnight = DurationEngine.calculate_raw_span(
            date(2025, 1, 15), time(22, 0), time(2, 0)
        )

        assert hours == 4.0
        assert spans_midnight is True

    def test_equal_times_are_a_full_day(self) -> None:
        """end == start counts as a 24 h overnight span."""
        hours, spans_midnight = DurationEngine.calculate_raw_span(
            date(2025, 1, 15), time(8, 0), time(8, 0)
        )

        assert hours == 24.0
        assert spans_midnight is True


# =============================================================================
# Test: Maintenance policy
# =============================================================================


class TestMaintenanceDuration:
    """Tolerant policy: floor 0.1 h, unrounded, no overnight limit."""

    def test_same_day(self, maintenance_profile: DomainProfile) -> None:
        """Plain same-day span."""
        assert (
            DurationEngine.calculate_duration(
                "2025-01-15", "09:00", "17:30", maintenance_profile
            )
            == 8.5
        )

    def test_overnight(self, maintenance_profile: DomainProfile) -> None:
        """22:00 → 02:00 is 4 h."""
        assert (
            DurationEngine.calculate_duration(
                "2025-01-15", "22:00", "02:00", maintenance_profile
            )
            == 4.0
        )

    def test_unrounded(self, maintenance_profile: DomainProfile) -> None:
        """80 minutes stays 1.333... h."""
        assert DurationEngine.calculate_duration(
            "2025-01-15", "09:00", "10:20", maintenance_profile
        ) == pytest.approx(80 / 60)

    def test_short_span_floored(self, maintenance_profile: DomainProfile) -> None:
        """3 minutes is raised to the 0.1 h floor."""
        assert (
            DurationEngine.calculate_duration(
                "2025-01-15", "09:00", "09:03", maintenance_profile
            )
            == 0.1
        )

    def test_long_overnight_accepted(self, maintenance_profile: DomainProfile) -> None:
        """Maintenance does not reject long overnight spans."""
        assert (
            DurationEngine.calculate_duration(
                "2025-01-15", "18:00", "07:00", maintenance_profile
            )
            == 13.0
        )

    def test_equal_times(self, maintenance_profile: DomainProfile) -> None:
        """end == start yields 24 h."""
        assert (
            DurationEngine.calculate_duration(
                "2025-01-15", "08:00", "08:00", maintenance_profile
            )
            == 24.0
        )

    @pytest.mark.parametrize(
        ("start", "end"),
        [("", "17:00"), ("09:00", ""), (None, None), ("9am", "17:00")],
    )
    def test_missing_or_bad_times_recover_to_floor(
        self,
        maintenance_profile: DomainProfile,
        start: str | None,
        end: str | None,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Unusable times recover to the floor with a warning."""
        with caplog.at_level(logging.WARNING):
            result = DurationEngine.calculate_duration(
                "2025-01-15", start, end, maintenance_profile
            )

        assert result == const.DEFAULT_MAINTENANCE_MIN_DURATION_HOURS
        assert "recovering with floor" in caplog.text

    def test_no_floor_and_no_times_rejected(
        self, maintenance_profile: DomainProfile
    ) -> None:
        """Without a floor there is nothing to recover to."""
        profile = dataclasses.replace(maintenance_profile, min_duration_hours=None)

        with pytest.raises(DurationValidationError) as exc_info:
            DurationEngine.calculate_duration("2025-01-15", "", "", profile)

        assert exc_info.value.error_key == const.ERROR_NON_POSITIVE_DURATION


# =============================================================================
# Test: Safety policy
# =============================================================================


class TestSafetyDuration:
    """Strict policy: cap 24 h, 2 dp, overnight limit 12 h."""

    def test_rounded_to_two_places(self, safety_profile: DomainProfile) -> None:
        """80 minutes → 1.33 h."""
        assert (
            DurationEngine.calculate_duration(
                "2025-01-15", "09:00", "10:20", safety_profile
            )
            == 1.33
        )

    def test_overnight(self, safety_profile: DomainProfile) -> None:
        """22:00 → 02:00 is 4 h."""
        assert (
            DurationEngine.calculate_duration(
                "2025-01-15", "22:00", "02:00", safety_profile
            )
            == 4.0
        )

    def test_long_same_day_accepted(self, safety_profile: DomainProfile) -> None:
        """The overnight limit does not apply to same-day spans."""
        assert (
            DurationEngine.calculate_duration(
                "2025-01-15", "08:00", "21:00", safety_profile
            )
            == 13.0
        )

    def test_overnight_at_limit_accepted(self, safety_profile: DomainProfile) -> None:
        """Exactly 12 h overnight is plausible."""
        assert (
            DurationEngine.calculate_duration(
                "2025-01-15", "20:00", "08:00", safety_profile
            )
            == 12.0
        )

    def test_overnight_over_limit_rejected(self, safety_profile: DomainProfile) -> None:
        """18:00 → 07:00 (13 h overnight) is rejected."""
        with pytest.raises(DurationValidationError) as exc_info:
            DurationEngine.calculate_duration(
                "2025-01-15", "18:00", "07:00", safety_profile
            )

        assert exc_info.value.field == const.FIELD_END_TIME
        assert exc_info.value.error_key == const.ERROR_OVERNIGHT_SPAN_TOO_LONG
        assert exc_info.value.hours == 13.0

    def test_equal_times_rejected(self, safety_profile: DomainProfile) -> None:
        """end == start is a 24 h overnight span and fails the limit."""
        with pytest.raises(DurationValidationError) as exc_info:
            DurationEngine.calculate_duration(
                "2025-01-15", "08:00", "08:00", safety_profile
            )

        assert exc_info.value.error_key == const.ERROR_OVERNIGHT_SPAN_TOO_LONG

    @pytest.mark.parametrize(
        ("start", "end", "field", "error_key"),
        [
            ("", "17:00", const.FIELD_START_TIME, const.ERROR_START_TIME_REQUIRED),
            ("09:00", None, const.FIELD_END_TIME, const.ERROR_END_TIME_REQUIRED),
            ("9am", "17:00", const.FIELD_START_TIME, const.ERROR_INVALID_TIME_FORMAT),
            ("09:00", "25:00", const.FIELD_END_TIME, const.ERROR_INVALID_TIME_FORMAT),
        ],
    )
    def test_missing_or_bad_times_rejected(
        self,
        safety_profile: DomainProfile,
        start: str | None,
        end: str | None,
        field: str,
        error_key: str,
    ) -> None:
        """Strict profiles raise with the failing field."""
        with pytest.raises(DurationValidationError) as exc_info:
            DurationEngine.calculate_duration("2025-01-15", start, end, safety_profile)

        assert exc_info.value.field == field
        assert exc_info.value.error_key == error_key

    def test_invalid_completed_date_rejected(self, safety_profile: DomainProfile) -> None:
        """An unparseable date is reported on completedDate."""
        with pytest.raises(DurationValidationError) as exc_info:
            DurationEngine.calculate_duration(
                "not a date", "09:00", "10:00", safety_profile
            )

        assert exc_info.value.field == const.FIELD_COMPLETED_DATE

    def test_cap_applied(self) -> None:
        """A lowered ceiling caps plausible spans."""
        profile = build_profile(
            const.DOMAIN_SAFETY, {const.CONF_MAX_DURATION_HOURS: 10}
        )

        assert (
            DurationEngine.calculate_duration("2025-01-15", "20:00", "08:00", profile)
            == 10.0
        )

    def test_accepts_time_objects(self, safety_profile: DomainProfile) -> None:
        """datetime.time inputs work like HH:MM strings."""
        assert (
            DurationEngine.calculate_duration(
                date(2025, 1, 15), time(9, 0), time(9, 45), safety_profile
            )
            == 0.75
        )

    def test_seconds_tolerated(self, safety_profile: DomainProfile) -> None:
        """HH:MM:SS from some browsers is truncated to minutes."""
        assert (
            DurationEngine.calculate_duration(
                "2025-01-15", "09:00:59", "10:30:00", safety_profile
            )
            == 1.5
        )
