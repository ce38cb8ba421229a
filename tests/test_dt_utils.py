"""Tests for utils/dt_utils.py."""

from datetime import date, datetime, time
from zoneinfo import ZoneInfo

from freezegun import freeze_time
import pytest

from facility_compliance.utils import dt_utils
from facility_compliance.utils.dt_utils import (
    TIME_UNIT_DAYS,
    TIME_UNIT_MONTHS,
    TIME_UNIT_WEEKS,
    TIME_UNIT_YEARS,
    dt_add_interval,
    dt_combine,
    dt_month_start,
    dt_parse_date,
    dt_parse_time,
    dt_today_local,
)


class TestParseDate:
    """dt_parse_date input formats."""

    @pytest.mark.parametrize(
        "value",
        [
            "2025-04-07",
            " 2025-04-07 ",
            "2025-04-07T00:00:00.000Z",
            "2025-04-07T15:30:00+02:00",
            "04/07/2025",
            "2025/04/07",
            date(2025, 4, 7),
            datetime(2025, 4, 7, 23, 59),
        ],
    )
    def test_accepted(self, value: object) -> None:
        """All supported shapes normalize to the same date."""
        assert dt_parse_date(value) == date(2025, 4, 7)  # type: ignore[arg-type]

    def test_european_fallback(self) -> None:
        """Day-first is tried when month-first is impossible."""
        assert dt_parse_date("25/12/2025") == date(2025, 12, 25)

    @pytest.mark.parametrize("value", [None, "", "yesterday", "2025-02-30", 20250407])
    def test_rejected(self, value: object) -> None:
        """Unparseable inputs return None."""
        assert dt_parse_date(value) is None  # type: ignore[arg-type]


class TestParseTime:
    """dt_parse_time HH:MM parsing."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("22:00", time(22, 0)),
            ("9:05", time(9, 5)),
            ("00:00", time(0, 0)),
            ("10:30:45", time(10, 30)),
            (time(8, 15, 30), time(8, 15)),
        ],
    )
    def test_accepted(self, value: object, expected: time) -> None:
        """HH:MM, single-digit hours, and seconds truncated."""
        assert dt_parse_time(value) == expected  # type: ignore[arg-type]

    @pytest.mark.parametrize("value", [None, "", "24:00", "12:75", "noon", "12"])
    def test_rejected(self, value: object) -> None:
        """Out-of-range or malformed values return None."""
        assert dt_parse_time(value) is None  # type: ignore[arg-type]


class TestAddInterval:
    """dt_add_interval calendar arithmetic."""

    @pytest.mark.parametrize(
        ("base", "unit", "delta", "expected"),
        [
            ("2025-01-31", TIME_UNIT_DAYS, 1, date(2025, 2, 1)),
            ("2025-01-31", TIME_UNIT_WEEKS, 1, date(2025, 2, 7)),
            ("2025-01-31", TIME_UNIT_MONTHS, 1, date(2025, 2, 28)),
            ("2024-01-31", TIME_UNIT_MONTHS, 1, date(2024, 2, 29)),
            ("2024-02-29", TIME_UNIT_YEARS, 1, date(2025, 2, 28)),
            ("2025-03-31", TIME_UNIT_MONTHS, 6, date(2025, 9, 30)),
        ],
    )
    def test_intervals(
        self, base: str, unit: str, delta: int, expected: date
    ) -> None:
        """Month and year arithmetic clamps to month end."""
        assert dt_add_interval(base, unit, delta) == expected

    def test_unknown_unit(self) -> None:
        """Unknown units return None."""
        assert dt_add_interval("2025-01-01", "fortnights", 1) is None

    def test_bad_base(self) -> None:
        """Unparseable base dates return None."""
        assert dt_add_interval("garbage", TIME_UNIT_DAYS, 1) is None


class TestTimezone:
    """Default timezone handling and 'today'."""

    @freeze_time("2025-01-15 23:30:00", tz_offset=0)
    def test_today_follows_configured_zone(self) -> None:
        """23:30 UTC is already the next day in Berlin."""
        assert dt_today_local() == date(2025, 1, 15)

        dt_utils.set_default_timezone("Europe/Berlin")

        assert dt_today_local() == date(2025, 1, 16)

    def test_set_default_timezone_accepts_zoneinfo(self) -> None:
        """ZoneInfo objects are stored as-is."""
        tz = ZoneInfo("America/Chicago")

        dt_utils.set_default_timezone(tz)

        assert dt_utils.get_default_timezone() is tz

    def test_combine_is_aware(self) -> None:
        """Composed datetimes carry the configured zone."""
        result = dt_combine(date(2025, 1, 15), time(9, 0))

        assert result.tzinfo == ZoneInfo("UTC")
        assert result.hour == 9


def test_month_start() -> None:
    """First day of the month."""
    assert dt_month_start(date(2025, 2, 28)) == date(2025, 2, 1)
