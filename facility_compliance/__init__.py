"""Facility compliance engine.

Recurring maintenance and safety-inspection schedules, actual-duration
calculation, checklist scoring and record classification for the facility
management dashboard.

Typical use:
    from facility_compliance import SAFETY_PROFILE, build_record_submission

    record = build_record_submission(payload, SAFETY_PROFILE, schedule)
"""

from .data_builders import (
    DataValidationError,
    build_record_submission,
    build_schedule,
    record_schedule_completion,
    refresh_schedule,
    validate_record_data,
    validate_schedule_data,
)
from .engines import (
    ChecklistEngine,
    ClassificationEngine,
    DurationEngine,
    DurationValidationError,
    RecurrenceEngine,
    StatisticsEngine,
    calculate_next_due_date,
    derive_schedule_status,
)
from .profiles import (
    MAINTENANCE_PROFILE,
    SAFETY_PROFILE,
    DomainProfile,
    build_profile,
    get_profile,
)

__all__ = [
    "MAINTENANCE_PROFILE",
    "SAFETY_PROFILE",
    "ChecklistEngine",
    "ClassificationEngine",
    "DataValidationError",
    "DomainProfile",
    "DurationEngine",
    "DurationValidationError",
    "RecurrenceEngine",
    "StatisticsEngine",
    "build_profile",
    "build_record_submission",
    "build_schedule",
    "calculate_next_due_date",
    "derive_schedule_status",
    "get_profile",
    "record_schedule_completion",
    "refresh_schedule",
    "validate_record_data",
    "validate_schedule_data",
]
