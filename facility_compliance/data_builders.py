"""Schedule and record builders for the facility compliance engine.

This module is the SINGLE SOURCE OF TRUTH for:
- Business-rule validation of editor payloads
- Complete schedule structure building (nextDueDate projection)
- Complete record structure building (duration, scores, statuses)

### Validation Functions
Each entity type has a `validate_<entity>_data()` function that:
- Runs the structural voluptuous schema from schemas.py
- Applies profile-dependent business rules
- Returns dict of errors {field: error_key} (empty if valid)

### Build Functions
Each entity type has a `build_<entity>()` function that:
- Validates, raising DataValidationError with the errors dict on failure
- Applies field defaults
- Fills every derived field from the engines
- Returns a new dict ready for the backend API (inputs are never mutated)

See Also:
- schemas.py: Structural schemas
- engines/: The pure computations wired together here
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import voluptuous as vol

from . import const
from .engines.checklist_engine import ChecklistEngine
from .engines.classification_engine import ClassificationEngine
from .engines.duration_engine import DurationEngine, DurationValidationError
from .engines.schedule_engine import (
    build_schedule_config,
    normalize_custom_days,
    parse_custom_days,
    RecurrenceEngine,
)
from .schemas import RECORD_SCHEMA, SCHEDULE_SCHEMA
from .utils.dt_utils import dt_parse_date

if TYPE_CHECKING:
    from .profiles import DomainProfile
    from .type_defs import RecordSubmission, ScheduleDefinition, ValidationErrors


class DataValidationError(Exception):
    """Raised by build functions when editor input fails validation.

    Attributes:
        errors: {field: error_key} for every failing field
    """

    def __init__(self, errors: ValidationErrors) -> None:
        """Initialize DataValidationError.

        Args:
            errors: {field: error_key} for every failing field
        """
        self.errors = dict(errors)
        details = "; ".join(
            f"{field}: {const.ERROR_MESSAGES.get(key, key)}"
            for field, key in sorted(self.errors.items())
        )
        super().__init__(f"Validation failed - {details}")

    @property
    def messages(self) -> dict[str, str]:
        """Return {field: human readable message} for display."""
        return {
            field: const.ERROR_MESSAGES.get(key, key)
            for field, key in self.errors.items()
        }


# ==============================================================================
# HELPER FUNCTIONS FOR ERROR MAPPING
# ==============================================================================

# Top-level field -> error key for structural (schema) failures
_SCHEDULE_FIELD_ERRORS: dict[str, str] = {
    const.DATA_SCHEDULE_FREQUENCY: const.ERROR_INVALID_FREQUENCY,
    const.DATA_SCHEDULE_START_DATE: const.ERROR_INVALID_START_DATE,
    const.DATA_SCHEDULE_CUSTOM_FREQUENCY_DAYS: const.ERROR_INVALID_CUSTOM_DAYS,
}

_RECORD_FIELD_ERRORS: dict[str, str] = {
    const.DATA_RECORD_COMPLETED_DATE: const.ERROR_INVALID_COMPLETED_DATE,
    const.DATA_RECORD_START_TIME: const.ERROR_INVALID_TIME_FORMAT,
    const.DATA_RECORD_END_TIME: const.ERROR_INVALID_TIME_FORMAT,
    const.DATA_RECORD_CATEGORY_RESULTS: const.ERROR_INVALID_CHECKLIST,
    const.DATA_RECORD_GENERAL_CHECKLIST: const.ERROR_INVALID_CHECKLIST,
    const.DATA_RECORD_VIOLATIONS: const.ERROR_INVALID_VIOLATION,
}


def _errors_from_invalid(
    exc: vol.Invalid, field_errors: dict[str, str]
) -> ValidationErrors:
    """Translate voluptuous errors into {field: error_key}.

    Only the first error per top-level field is kept.
    """
    errors: ValidationErrors = {}
    invalids = exc.errors if isinstance(exc, vol.MultipleInvalid) else [exc]
    for invalid in invalids:
        path = [str(p) for p in invalid.path]
        field = path[0] if path else const.FIELD_BASE
        if field in errors:
            continue
        if const.DATA_CATEGORY_WEIGHT in path:
            errors[field] = const.ERROR_INVALID_CATEGORY_WEIGHT
        elif field == const.DATA_SCHEDULE_START_DATE and isinstance(
            invalid, vol.RequiredFieldInvalid
        ):
            errors[field] = const.ERROR_START_DATE_REQUIRED
        else:
            errors[field] = field_errors.get(field, const.ERROR_INVALID_INPUT)
        const.LOGGER.debug("Validation error on %s: %s", ".".join(path), invalid)
    return errors


# ==============================================================================
# SCHEDULES
# ==============================================================================


def validate_schedule_data(
    data: dict[str, Any], profile: DomainProfile
) -> ValidationErrors:
    """Validate schedule business rules - SINGLE SOURCE OF TRUTH.

    Args:
        data: Schedule dict from a schedule editor (wire keys)
        profile: Domain policy; strict profiles reject unusable custom days
                 instead of falling back to 30

    Returns:
        Dict of errors: {field: error_key}
        Empty dict means validation passed.

    Validation Rules:
        1. Structure (frequency enum, parseable start date, status enum)
        2. Custom frequency has a positive day count (strict profiles only)
    """
    try:
        validated = SCHEDULE_SCHEMA(dict(data))
    except vol.Invalid as exc:
        return _errors_from_invalid(exc, _SCHEDULE_FIELD_ERRORS)

    errors: ValidationErrors = {}
    if (
        validated[const.DATA_SCHEDULE_FREQUENCY] == const.FREQUENCY_CUSTOM
        and profile.strict_validation
        and parse_custom_days(
            validated.get(const.DATA_SCHEDULE_CUSTOM_FREQUENCY_DAYS)
        )
        is None
    ):
        errors[const.FIELD_CUSTOM_FREQUENCY_DAYS] = const.ERROR_INVALID_CUSTOM_DAYS

    return errors


def build_schedule(
    user_input: dict[str, Any], profile: DomainProfile
) -> ScheduleDefinition:
    """Build a complete schedule dict with nextDueDate projected.

    Any nextDueDate in the input is discarded and re-derived from
    startDate/frequency/customFrequencyDays.

    Raises:
        DataValidationError: If validate_schedule_data() reports errors.
    """
    errors = validate_schedule_data(user_input, profile)
    if errors:
        raise DataValidationError(errors)

    schedule: dict[str, Any] = SCHEDULE_SCHEMA(dict(user_input))

    start = dt_parse_date(schedule[const.DATA_SCHEDULE_START_DATE])
    schedule[const.DATA_SCHEDULE_START_DATE] = start.isoformat() if start else None

    if schedule[const.DATA_SCHEDULE_FREQUENCY] == const.FREQUENCY_CUSTOM:
        schedule[const.DATA_SCHEDULE_CUSTOM_FREQUENCY_DAYS] = normalize_custom_days(
            schedule.get(const.DATA_SCHEDULE_CUSTOM_FREQUENCY_DAYS)
        )

    next_due = RecurrenceEngine(build_schedule_config(schedule)).get_next_due_date()
    schedule[const.DATA_SCHEDULE_NEXT_DUE_DATE] = (
        next_due.isoformat() if next_due else None
    )

    const.LOGGER.debug(
        "build_schedule: %s from %s -> next due %s",
        schedule[const.DATA_SCHEDULE_FREQUENCY],
        schedule[const.DATA_SCHEDULE_START_DATE],
        schedule[const.DATA_SCHEDULE_NEXT_DUE_DATE],
    )
    return schedule  # type: ignore[return-value]


def refresh_schedule(
    schedule: dict[str, Any],
    updates: dict[str, Any],
    profile: DomainProfile,
) -> ScheduleDefinition:
    """Apply editor updates to a schedule, re-projecting nextDueDate if needed.

    The due date is recomputed from scratch whenever startDate, frequency or
    customFrequencyDays change; it is never offset from the previous value.
    A nextDueDate supplied in `updates` is ignored because it is derived.

    Raises:
        DataValidationError: If the merged schedule is invalid.
    """
    if const.DATA_SCHEDULE_NEXT_DUE_DATE in updates:
        const.LOGGER.warning(
            "refresh_schedule: ignoring supplied %s, it is derived",
            const.DATA_SCHEDULE_NEXT_DUE_DATE,
        )
        updates = {
            k: v for k, v in updates.items() if k != const.DATA_SCHEDULE_NEXT_DUE_DATE
        }

    merged = {**schedule, **updates}
    changed = {
        key
        for key in const.SCHEDULE_PROJECTION_FIELDS
        if key in updates and updates[key] != schedule.get(key)
    }

    if changed or not schedule.get(const.DATA_SCHEDULE_NEXT_DUE_DATE):
        const.LOGGER.debug("refresh_schedule: re-projecting due date (%s)", changed)
        return build_schedule(merged, profile)

    errors = validate_schedule_data(merged, profile)
    if errors:
        raise DataValidationError(errors)

    return merged  # type: ignore[return-value]


def record_schedule_completion(
    schedule: dict[str, Any], record: dict[str, Any]
) -> ScheduleDefinition:
    """Return a copy of the schedule with lastCompletedDate set from a record.

    nextDueDate is left as is: it always derives from startDate.
    """
    updated = dict(schedule)
    completed_on = dt_parse_date(record.get(const.DATA_RECORD_COMPLETED_DATE))
    if completed_on is not None:
        updated[const.DATA_SCHEDULE_LAST_COMPLETED_DATE] = completed_on.isoformat()
    return updated  # type: ignore[return-value]


# ==============================================================================
# RECORDS
# ==============================================================================


def validate_record_data(
    data: dict[str, Any], profile: DomainProfile
) -> ValidationErrors:
    """Validate record business rules - SINGLE SOURCE OF TRUTH.

    Args:
        data: Record dict from a record editor (wire keys)
        profile: Domain policy; strict profiles also reject missing times and
                 implausible overnight spans

    Returns:
        Dict of errors: {field: error_key}
        Empty dict means validation passed.

    Validation Rules:
        1. Structure (dates, HH:MM times, categories, items, violations)
        2. Duration plausibility (missing times only recover on tolerant profiles)
    """
    try:
        validated = RECORD_SCHEMA(dict(data))
    except vol.Invalid as exc:
        return _errors_from_invalid(exc, _RECORD_FIELD_ERRORS)

    errors: ValidationErrors = {}
    try:
        DurationEngine.calculate_duration(
            validated[const.DATA_RECORD_COMPLETED_DATE],
            validated.get(const.DATA_RECORD_START_TIME),
            validated.get(const.DATA_RECORD_END_TIME),
            profile,
        )
    except DurationValidationError as err:
        errors[err.field] = err.error_key

    return errors


def resolve_categories(
    data: dict[str, Any], profile: DomainProfile
) -> list[dict[str, Any]]:
    """Return the categories a record is scored on.

    Maintenance records without explicit categories are scored on their
    generalChecklist, wrapped in the implicit weight-100 category.
    """
    categories = list(data.get(const.DATA_RECORD_CATEGORY_RESULTS) or [])
    general = data.get(const.DATA_RECORD_GENERAL_CHECKLIST) or []

    if not categories and general and not profile.scores_compliance:
        return [dict(ChecklistEngine.build_general_category(general))]

    if categories and general:
        const.LOGGER.debug(
            "resolve_categories: %d general items kept but not scored, "
            "explicit categories present",
            len(general),
        )
    return categories


def build_record_submission(
    user_input: dict[str, Any],
    profile: DomainProfile,
    schedule: dict[str, Any] | None = None,
) -> RecordSubmission:
    """Build the complete record payload with every derived field filled in.

    Pipeline:
        1. validate_record_data()
        2. DurationEngine → actualDuration
        3. ChecklistEngine → categoryComplianceScore, overallScore,
           completionStats, totalTimeSpent
        4. ClassificationEngine → status (+ complianceStatus)

    Args:
        user_input: Record dict from the record editor
        profile: Domain policy
        schedule: Optional schedule the record executes (sets scheduleId)

    Raises:
        DataValidationError: If validate_record_data() reports errors.
    """
    errors = validate_record_data(user_input, profile)
    if errors:
        raise DataValidationError(errors)

    record: dict[str, Any] = RECORD_SCHEMA(dict(user_input))

    completed_on = dt_parse_date(record[const.DATA_RECORD_COMPLETED_DATE])
    record[const.DATA_RECORD_COMPLETED_DATE] = (
        completed_on.isoformat() if completed_on else None
    )

    record[const.DATA_RECORD_ACTUAL_DURATION] = DurationEngine.calculate_duration(
        completed_on,
        record.get(const.DATA_RECORD_START_TIME),
        record.get(const.DATA_RECORD_END_TIME),
        profile,
    )

    categories = ChecklistEngine.apply_category_scores(
        resolve_categories(record, profile), profile
    )
    stats = ChecklistEngine.calculate_completion_stats(categories)
    overall = ChecklistEngine.calculate_overall_score(categories)

    record[const.DATA_RECORD_CATEGORY_RESULTS] = categories
    record[const.DATA_RECORD_OVERALL_SCORE] = overall
    record[const.DATA_RECORD_COMPLETION_STATS] = stats
    record[const.DATA_RECORD_TOTAL_TIME_SPENT] = (
        ChecklistEngine.calculate_total_time_spent(categories)
    )

    violations = record.get(const.DATA_RECORD_VIOLATIONS) or []
    record.update(
        ClassificationEngine.classify(
            stats[const.DATA_STATS_PERCENTAGE],
            profile,
            overall_score=overall,
            violations=violations,
        )
    )

    if profile.scores_compliance:
        record[const.DATA_RECORD_CORRECTIVE_ACTIONS_REQUIRED] = bool(
            violations
        ) or ChecklistEngine.has_corrective_findings(categories)
    elif not violations:
        record.pop(const.DATA_RECORD_VIOLATIONS, None)

    if schedule and schedule.get(const.DATA_SCHEDULE_ID):
        record[const.DATA_RECORD_SCHEDULE_ID] = schedule[const.DATA_SCHEDULE_ID]

    record[const.DATA_RECORD_ADMIN_VERIFIED] = False

    const.LOGGER.debug(
        "build_record_submission: %s record %s -> duration=%s overall=%s %s",
        profile.domain,
        record.get(const.DATA_RECORD_SCHEDULE_ID),
        record[const.DATA_RECORD_ACTUAL_DURATION],
        overall,
        stats,
    )
    return record  # type: ignore[return-value]
