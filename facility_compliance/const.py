# File: const.py
"""Constants for the facility compliance engine.

This file centralizes frequency identifiers, status enums, data keys, domain
defaults, configuration keys and error keys for consistency across the engines,
builders and schemas.
"""

import logging

# ------------------------------------------------------------------------------------------------
# General
# ------------------------------------------------------------------------------------------------

# Logger
LOGGER = logging.getLogger(__package__)

# Domains
DOMAIN_MAINTENANCE = "maintenance"
DOMAIN_SAFETY = "safety"

DOMAIN_OPTIONS = [DOMAIN_MAINTENANCE, DOMAIN_SAFETY]

# ------------------------------------------------------------------------------------------------
# Frequencies
# ------------------------------------------------------------------------------------------------

FREQUENCY_DAILY = "daily"
FREQUENCY_WEEKLY = "weekly"
FREQUENCY_MONTHLY = "monthly"
FREQUENCY_QUARTERLY = "quarterly"
FREQUENCY_HALF_YEARLY = "half-yearly"
FREQUENCY_ANNUALLY = "annually"
FREQUENCY_CUSTOM = "custom"

FREQUENCY_OPTIONS = [
    FREQUENCY_DAILY,
    FREQUENCY_WEEKLY,
    FREQUENCY_MONTHLY,
    FREQUENCY_QUARTERLY,
    FREQUENCY_HALF_YEARLY,
    FREQUENCY_ANNUALLY,
    FREQUENCY_CUSTOM,
]

# Default day count when a custom frequency has no usable value
DEFAULT_CUSTOM_FREQUENCY_DAYS = 30

DAYS_PER_WEEK = 7
MONTHS_PER_QUARTER = 3
MONTHS_PER_HALF_YEAR = 6

# ------------------------------------------------------------------------------------------------
# Schedule Status
# ------------------------------------------------------------------------------------------------

SCHEDULE_STATUS_ACTIVE = "active"
SCHEDULE_STATUS_INACTIVE = "inactive"
SCHEDULE_STATUS_COMPLETED = "completed"
SCHEDULE_STATUS_OVERDUE = "overdue"

SCHEDULE_STATUS_OPTIONS = [
    SCHEDULE_STATUS_ACTIVE,
    SCHEDULE_STATUS_INACTIVE,
    SCHEDULE_STATUS_COMPLETED,
    SCHEDULE_STATUS_OVERDUE,
]

# ------------------------------------------------------------------------------------------------
# Record Status
# ------------------------------------------------------------------------------------------------

RECORD_STATUS_COMPLETED = "completed"
RECORD_STATUS_PARTIALLY_COMPLETED = "partially_completed"
RECORD_STATUS_FAILED = "failed"

COMPLIANCE_STATUS_COMPLIANT = "compliant"
COMPLIANCE_STATUS_NON_COMPLIANT = "non_compliant"
COMPLIANCE_STATUS_REQUIRES_ATTENTION = "requires_attention"

# ------------------------------------------------------------------------------------------------
# Checklist Item Status
# ------------------------------------------------------------------------------------------------

# Maintenance
ITEM_STATUS_COMPLETED = "completed"
ITEM_STATUS_FAILED = "failed"
ITEM_STATUS_SKIPPED = "skipped"

# Safety
ITEM_STATUS_COMPLIANT = "compliant"
ITEM_STATUS_NON_COMPLIANT = "non_compliant"
ITEM_STATUS_NOT_APPLICABLE = "not_applicable"
ITEM_STATUS_REQUIRES_ATTENTION = "requires_attention"

MAINTENANCE_ITEM_STATUS_OPTIONS = [
    ITEM_STATUS_COMPLETED,
    ITEM_STATUS_FAILED,
    ITEM_STATUS_SKIPPED,
]

SAFETY_ITEM_STATUS_OPTIONS = [
    ITEM_STATUS_COMPLIANT,
    ITEM_STATUS_NON_COMPLIANT,
    ITEM_STATUS_NOT_APPLICABLE,
    ITEM_STATUS_REQUIRES_ATTENTION,
]

# Safety items that count toward the compliance numerator
SAFETY_PASSING_ITEM_STATUSES = frozenset(
    {ITEM_STATUS_COMPLIANT, ITEM_STATUS_NOT_APPLICABLE}
)

# Safety items that require corrective follow-up
SAFETY_FINDING_ITEM_STATUSES = frozenset(
    {ITEM_STATUS_NON_COMPLIANT, ITEM_STATUS_REQUIRES_ATTENTION}
)

# ------------------------------------------------------------------------------------------------
# Risk Levels / Violations
# ------------------------------------------------------------------------------------------------

RISK_LEVEL_LOW = "low"
RISK_LEVEL_MEDIUM = "medium"
RISK_LEVEL_HIGH = "high"
RISK_LEVEL_CRITICAL = "critical"

RISK_LEVEL_OPTIONS = [
    RISK_LEVEL_LOW,
    RISK_LEVEL_MEDIUM,
    RISK_LEVEL_HIGH,
    RISK_LEVEL_CRITICAL,
]

# Any violation at these levels forces non_compliant
BLOCKING_RISK_LEVELS = frozenset({RISK_LEVEL_HIGH, RISK_LEVEL_CRITICAL})

VIOLATION_STATUS_OPEN = "open"
VIOLATION_STATUS_IN_PROGRESS = "in_progress"
VIOLATION_STATUS_RESOLVED = "resolved"
VIOLATION_STATUS_CLOSED = "closed"

VIOLATION_STATUS_OPTIONS = [
    VIOLATION_STATUS_OPEN,
    VIOLATION_STATUS_IN_PROGRESS,
    VIOLATION_STATUS_RESOLVED,
    VIOLATION_STATUS_CLOSED,
]

# Violations still counted as open on the dashboard
OPEN_VIOLATION_STATUSES = frozenset(
    {VIOLATION_STATUS_OPEN, VIOLATION_STATUS_IN_PROGRESS}
)

VIOLATION_PRIORITY_OPTIONS = ["immediate", "urgent", "moderate", "low"]

# ------------------------------------------------------------------------------------------------
# Data Keys (wire format shared with the dashboard)
# ------------------------------------------------------------------------------------------------

# Schedule
DATA_SCHEDULE_ID = "id"
DATA_SCHEDULE_TITLE = "title"
DATA_SCHEDULE_FREQUENCY = "frequency"
DATA_SCHEDULE_CUSTOM_FREQUENCY_DAYS = "customFrequencyDays"
DATA_SCHEDULE_START_DATE = "startDate"
DATA_SCHEDULE_NEXT_DUE_DATE = "nextDueDate"
DATA_SCHEDULE_LAST_COMPLETED_DATE = "lastCompletedDate"
DATA_SCHEDULE_STATUS = "status"

# Fields whose change requires the due date to be projected again
SCHEDULE_PROJECTION_FIELDS = frozenset(
    {
        DATA_SCHEDULE_FREQUENCY,
        DATA_SCHEDULE_START_DATE,
        DATA_SCHEDULE_CUSTOM_FREQUENCY_DAYS,
    }
)

# Checklist item
DATA_ITEM_ID = "itemId"
DATA_ITEM_DESCRIPTION = "description"
DATA_ITEM_IS_REQUIRED = "isRequired"
DATA_ITEM_RISK_LEVEL = "riskLevel"
DATA_ITEM_COMPLETED = "completed"
DATA_ITEM_STATUS = "status"
DATA_ITEM_NOTES = "notes"
DATA_ITEM_CORRECTIVE_ACTION = "correctiveAction"
DATA_ITEM_SAFETY_STANDARD = "safetyStandard"

# Category
DATA_CATEGORY_ID = "categoryId"
DATA_CATEGORY_NAME = "categoryName"
DATA_CATEGORY_WEIGHT = "weight"
DATA_CATEGORY_TIME_SPENT = "timeSpent"
DATA_CATEGORY_ITEMS = "checklistItems"
DATA_CATEGORY_SCORE = "categoryComplianceScore"

# Record
DATA_RECORD_SCHEDULE_ID = "scheduleId"
DATA_RECORD_COMPLETED_DATE = "completedDate"
DATA_RECORD_START_TIME = "startTime"
DATA_RECORD_END_TIME = "endTime"
DATA_RECORD_ACTUAL_DURATION = "actualDuration"
DATA_RECORD_CATEGORY_RESULTS = "categoryResults"
DATA_RECORD_GENERAL_CHECKLIST = "generalChecklist"
DATA_RECORD_OVERALL_SCORE = "overallScore"
DATA_RECORD_COMPLETION_STATS = "completionStats"
DATA_RECORD_STATUS = "status"
DATA_RECORD_COMPLIANCE_STATUS = "complianceStatus"
DATA_RECORD_VIOLATIONS = "violations"
DATA_RECORD_TOTAL_TIME_SPENT = "totalTimeSpent"
DATA_RECORD_CORRECTIVE_ACTIONS_REQUIRED = "correctiveActionsRequired"
DATA_RECORD_ADMIN_VERIFIED = "adminVerified"
DATA_RECORD_NOTES = "notes"

# Completion statistics
DATA_STATS_COMPLETED = "completed"
DATA_STATS_TOTAL = "total"
DATA_STATS_PERCENTAGE = "percentage"

# Violation
DATA_VIOLATION_ID = "id"
DATA_VIOLATION_DESCRIPTION = "description"
DATA_VIOLATION_RISK_LEVEL = "riskLevel"
DATA_VIOLATION_STATUS = "status"
DATA_VIOLATION_PRIORITY = "priority"
DATA_VIOLATION_CORRECTIVE_ACTION = "correctiveAction"

# Implicit maintenance category
GENERAL_CATEGORY_ID = "general"
GENERAL_CATEGORY_NAME = "general checklist"
GENERAL_CATEGORY_WEIGHT = 100

# ------------------------------------------------------------------------------------------------
# Scoring
# ------------------------------------------------------------------------------------------------

SCORE_MIN = 0
SCORE_MAX = 100

# Completion thresholds for partially_completed
DEFAULT_MAINTENANCE_PARTIAL_THRESHOLD = 50
DEFAULT_SAFETY_PARTIAL_THRESHOLD = 70

# Compliance thresholds (score below -> classification)
DEFAULT_NON_COMPLIANT_BELOW = 80
DEFAULT_REQUIRES_ATTENTION_BELOW = 95

# ------------------------------------------------------------------------------------------------
# Duration
# ------------------------------------------------------------------------------------------------

HOURS_PER_DAY = 24
MINUTES_PER_HOUR = 60
SECONDS_PER_HOUR = 3600

# Maintenance floor avoids zero-duration records (6 minutes)
DEFAULT_MAINTENANCE_MIN_DURATION_HOURS = 0.1

# Safety ceiling and overnight plausibility limit
DEFAULT_SAFETY_MAX_DURATION_HOURS = 24.0
DEFAULT_SAFETY_MAX_OVERNIGHT_HOURS = 12.0

# Float precision for rounded durations
DATA_FLOAT_PRECISION = 2

# Precision of the average inspection time widget
STATS_DURATION_PRECISION = 1

# ------------------------------------------------------------------------------------------------
# Configuration Keys (profile options)
# ------------------------------------------------------------------------------------------------

CONF_MIN_DURATION_HOURS = "min_duration_hours"
CONF_MAX_DURATION_HOURS = "max_duration_hours"
CONF_MAX_OVERNIGHT_HOURS = "max_overnight_hours"
CONF_DURATION_PRECISION = "duration_precision"
CONF_PARTIAL_THRESHOLD = "partial_threshold"
CONF_NON_COMPLIANT_BELOW = "non_compliant_below"
CONF_REQUIRES_ATTENTION_BELOW = "requires_attention_below"
CONF_STRICT_VALIDATION = "strict_validation"

# ------------------------------------------------------------------------------------------------
# Error Keys
# ------------------------------------------------------------------------------------------------

ERROR_INVALID_FREQUENCY = "invalid_frequency"
ERROR_INVALID_CUSTOM_DAYS = "invalid_custom_frequency_days"
ERROR_INVALID_START_DATE = "invalid_start_date"
ERROR_START_DATE_REQUIRED = "start_date_required"
ERROR_INVALID_COMPLETED_DATE = "invalid_completed_date"
ERROR_START_TIME_REQUIRED = "start_time_required"
ERROR_END_TIME_REQUIRED = "end_time_required"
ERROR_INVALID_TIME_FORMAT = "invalid_time_format"
ERROR_NON_POSITIVE_DURATION = "non_positive_duration"
ERROR_OVERNIGHT_SPAN_TOO_LONG = "overnight_span_too_long"
ERROR_INVALID_CATEGORY_WEIGHT = "invalid_category_weight"
ERROR_INVALID_CHECKLIST = "invalid_checklist"
ERROR_INVALID_VIOLATION = "invalid_violation"
ERROR_INVALID_INPUT = "invalid_input"

# Error message templates shown next to the failing field
ERROR_MESSAGES: dict[str, str] = {
    ERROR_INVALID_FREQUENCY: "Frequency must be one of: " + ", ".join(FREQUENCY_OPTIONS),
    ERROR_INVALID_CUSTOM_DAYS: "Custom frequency requires a positive number of days",
    ERROR_INVALID_START_DATE: "Start date is not a valid calendar date",
    ERROR_START_DATE_REQUIRED: "Start date is required",
    ERROR_INVALID_COMPLETED_DATE: "Completed date is not a valid calendar date",
    ERROR_START_TIME_REQUIRED: "Start time is required",
    ERROR_END_TIME_REQUIRED: "End time is required",
    ERROR_INVALID_TIME_FORMAT: "Time must use the HH:MM format",
    ERROR_NON_POSITIVE_DURATION: "End time must be after start time",
    ERROR_OVERNIGHT_SPAN_TOO_LONG: (
        "Overnight inspections longer than 12 hours are probably a data-entry "
        "error; check the start and end times"
    ),
    ERROR_INVALID_CATEGORY_WEIGHT: "Category weight must be between 0 and 100",
    ERROR_INVALID_CHECKLIST: "Checklist items are malformed",
    ERROR_INVALID_VIOLATION: "Violation entries are malformed",
    ERROR_INVALID_INPUT: "Input is malformed",
}

# Field names used as error dict keys
FIELD_FREQUENCY = DATA_SCHEDULE_FREQUENCY
FIELD_CUSTOM_FREQUENCY_DAYS = DATA_SCHEDULE_CUSTOM_FREQUENCY_DAYS
FIELD_START_DATE = DATA_SCHEDULE_START_DATE
FIELD_COMPLETED_DATE = DATA_RECORD_COMPLETED_DATE
FIELD_START_TIME = DATA_RECORD_START_TIME
FIELD_END_TIME = DATA_RECORD_END_TIME
FIELD_CATEGORY_RESULTS = DATA_RECORD_CATEGORY_RESULTS
FIELD_VIOLATIONS = DATA_RECORD_VIOLATIONS
FIELD_BASE = "base"
