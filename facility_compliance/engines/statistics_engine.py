"""Statistics Engine - Dashboard summary figures for schedules and records.

This engine centralizes the summary widgets shown above the maintenance and
safety-inspection tables:
- Schedule counts (total, active, overdue)
- Records completed this month and records awaiting admin verification
- Average duration, average compliance score and compliance rate
- Open and critical open violations

Design Principles:
    - Stateless: operates on the schedule/record lists passed in
    - Consistent: overdue detection shares derive_schedule_status() with the
      schedule editors
    - Deterministic: "today" is injectable for reproducible results
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date
from typing import TYPE_CHECKING, Any

from .. import const
from ..utils.dt_utils import dt_month_start, dt_parse_date, dt_today_local
from ..utils.math_utils import calculate_percentage, round_half_up, round_hours
from .schedule_engine import derive_schedule_status

if TYPE_CHECKING:
    from ..type_defs import MaintenanceStats, SafetyInspectionStats


class StatisticsEngine:
    """Unified engine for dashboard statistics.

    All methods operate on data structures passed as arguments. The engine
    does NOT persist anything.

    Example:
        stats = StatisticsEngine()
        summary = stats.calculate_safety_stats(schedules, records)
        summary["complianceRate"]  # e.g. 67
    """

    # ────────────────────────────────────────────────────────────────
    # Schedule counts
    # ────────────────────────────────────────────────────────────────

    def count_schedules(
        self, schedules: Sequence[dict[str, Any]], today: date | None = None
    ) -> dict[str, int]:
        """Count total, active and overdue schedules.

        A schedule counts as overdue when derive_schedule_status() reports it
        overdue (stored overdue status, or active with a past nextDueDate).
        Overdue schedules are not counted as active.
        """
        ref = today or dt_today_local()
        statuses = [derive_schedule_status(schedule, ref) for schedule in schedules]
        return {
            "totalSchedules": len(schedules),
            "activeSchedules": statuses.count(const.SCHEDULE_STATUS_ACTIVE),
            "overdueSchedules": statuses.count(const.SCHEDULE_STATUS_OVERDUE),
        }

    # ────────────────────────────────────────────────────────────────
    # Record helpers
    # ────────────────────────────────────────────────────────────────

    def completed_this_month(
        self, records: Iterable[dict[str, Any]], today: date | None = None
    ) -> int:
        """Count completed records dated in the current calendar month."""
        month_start = dt_month_start(today or dt_today_local())
        count = 0
        for record in records:
            completed_on = dt_parse_date(record.get(const.DATA_RECORD_COMPLETED_DATE))
            if (
                completed_on is not None
                and dt_month_start(completed_on) == month_start
                and record.get(const.DATA_RECORD_STATUS) == const.RECORD_STATUS_COMPLETED
            ):
                count += 1
        return count

    @staticmethod
    def average_of(records: Sequence[dict[str, Any]], key: str) -> float:
        """Average a numeric record field, 0.0 for no records.

        Non-numeric values count as 0 so a single malformed record cannot
        break the dashboard.
        """
        if not records:
            return 0.0
        total = 0.0
        for record in records:
            try:
                total += float(record.get(key) or 0)
            except (TypeError, ValueError):
                const.LOGGER.warning(
                    "average_of: ignoring non-numeric %s=%r", key, record.get(key)
                )
        return total / len(records)

    @staticmethod
    def count_open_violations(
        records: Iterable[dict[str, Any]], critical_only: bool = False
    ) -> int:
        """Count open/in-progress violations, optionally only critical ones."""
        count = 0
        for record in records:
            for violation in record.get(const.DATA_RECORD_VIOLATIONS) or []:
                status = violation.get(
                    const.DATA_VIOLATION_STATUS, const.VIOLATION_STATUS_OPEN
                )
                if status not in const.OPEN_VIOLATION_STATUSES:
                    continue
                if (
                    critical_only
                    and violation.get(const.DATA_VIOLATION_RISK_LEVEL)
                    != const.RISK_LEVEL_CRITICAL
                ):
                    continue
                count += 1
        return count

    # ────────────────────────────────────────────────────────────────
    # Dashboard summaries
    # ────────────────────────────────────────────────────────────────

    def calculate_maintenance_stats(
        self,
        schedules: Sequence[dict[str, Any]],
        records: Sequence[dict[str, Any]],
        today: date | None = None,
    ) -> MaintenanceStats:
        """Summary figures for the maintenance dashboard.

        averageCompletionTime averages actualDuration across all records.
        pendingVerification counts every record not yet admin-verified.
        """
        ref = today or dt_today_local()
        stats: dict[str, Any] = self.count_schedules(schedules, ref)
        stats["completedThisMonth"] = self.completed_this_month(records, ref)
        stats["pendingVerification"] = sum(
            1 for r in records if not r.get(const.DATA_RECORD_ADMIN_VERIFIED, False)
        )
        stats["averageCompletionTime"] = round_hours(
            self.average_of(records, const.DATA_RECORD_ACTUAL_DURATION)
        )
        return stats  # type: ignore[return-value]

    def calculate_safety_stats(
        self,
        schedules: Sequence[dict[str, Any]],
        records: Sequence[dict[str, Any]],
        today: date | None = None,
    ) -> SafetyInspectionStats:
        """Summary figures for the safety-inspection dashboard.

        Averages and the compliance rate only consider completed records.
        pendingVerification counts completed records not yet admin-verified.
        """
        ref = today or dt_today_local()
        completed = [
            r
            for r in records
            if r.get(const.DATA_RECORD_STATUS) == const.RECORD_STATUS_COMPLETED
        ]
        compliant = sum(
            1
            for r in completed
            if r.get(const.DATA_RECORD_COMPLIANCE_STATUS)
            == const.COMPLIANCE_STATUS_COMPLIANT
        )

        stats: dict[str, Any] = self.count_schedules(schedules, ref)
        stats["completedThisMonth"] = self.completed_this_month(records, ref)
        stats["pendingVerification"] = sum(
            1 for r in completed if not r.get(const.DATA_RECORD_ADMIN_VERIFIED, False)
        )
        stats["averageComplianceScore"] = round_half_up(
            self.average_of(completed, const.DATA_RECORD_OVERALL_SCORE)
        )
        stats["openViolations"] = self.count_open_violations(records)
        stats["criticalViolations"] = self.count_open_violations(
            records, critical_only=True
        )
        stats["averageInspectionTime"] = round_hours(
            self.average_of(completed, const.DATA_RECORD_ACTUAL_DURATION),
            const.STATS_DURATION_PRECISION,
        )
        stats["complianceRate"] = calculate_percentage(compliant, len(completed))

        const.LOGGER.debug(
            "calculate_safety_stats: %d schedules, %d records -> %s",
            len(schedules),
            len(records),
            stats,
        )
        return stats  # type: ignore[return-value]
