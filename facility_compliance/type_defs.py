"""Type definitions for facility compliance data structures.

TypedDicts describe the payloads exchanged with the maintenance and
safety-inspection editors. Keys keep the dashboard's camelCase wire format so
records round-trip without a mapping layer; the key strings themselves are
mirrored as DATA_* constants in const.py.

NOTE: TypedDict is STATIC ANALYSIS ONLY. Engines still use .get() defaults and
tolerate missing keys at runtime.

IMPORTANT: This file must NOT import from engines or builders to avoid circular
dependencies. Only import from typing.
"""

from typing import Literal, NotRequired, TypedDict

# =============================================================================
# Type Aliases (for readability)
# =============================================================================

ScheduleId = str
CategoryId = str
ItemId = str
ISODate = str  # ISO 8601 date string "2025-01-15"
TimeOfDay = str  # "HH:MM"

Frequency = Literal[
    "daily",
    "weekly",
    "monthly",
    "quarterly",
    "half-yearly",
    "annually",
    "custom",
]
RiskLevel = Literal["low", "medium", "high", "critical"]
RecordStatus = Literal["completed", "partially_completed", "failed"]
ComplianceStatus = Literal["compliant", "non_compliant", "requires_attention"]
ScheduleStatus = Literal["active", "inactive", "completed", "overdue"]


# =============================================================================
# Checklist Structures
# =============================================================================


class ChecklistItemResult(TypedDict):
    """Leaf checklist entry filled in by a technician or inspector.

    `status` values differ by domain:
    - maintenance: completed / failed / skipped
    - safety: compliant / non_compliant / not_applicable / requires_attention
    """

    itemId: ItemId
    description: str
    isRequired: bool
    completed: bool
    status: str
    riskLevel: NotRequired[RiskLevel]  # safety only
    notes: NotRequired[str]
    correctiveAction: NotRequired[str]
    safetyStandard: NotRequired[str]


class CategoryResult(TypedDict):
    """Group of checklist items with its share of the overall score."""

    categoryId: CategoryId
    categoryName: str
    weight: float  # 0-100, normalized by the aggregator
    timeSpent: int  # minutes
    checklistItems: list[ChecklistItemResult]
    categoryComplianceScore: NotRequired[int]  # derived


class CompletionStats(TypedDict):
    """Flattened completion counts across all categories."""

    completed: int
    total: int
    percentage: int


# =============================================================================
# Schedule / Record Structures
# =============================================================================


class ScheduleConfig(TypedDict, total=False):
    """Configuration for RecurrenceEngine in schedule_engine.py.

    All fields are optional (total=False) to support partial configuration
    coming straight from a schedule editor.
    """

    frequency: str  # FREQUENCY_* constant from const.py
    custom_days: int  # Only used for FREQUENCY_CUSTOM
    start_date: str  # ISO date string - base for the projection


class ScheduleDefinition(TypedDict):
    """Recurring maintenance or inspection rule."""

    frequency: Frequency
    startDate: ISODate
    nextDueDate: ISODate  # derived, always startDate + one period
    customFrequencyDays: NotRequired[int]
    id: NotRequired[ScheduleId]
    title: NotRequired[str]
    status: NotRequired[ScheduleStatus]
    lastCompletedDate: NotRequired[ISODate]


class Violation(TypedDict):
    """Safety violation recorded during an inspection."""

    id: str
    description: str
    riskLevel: RiskLevel
    status: NotRequired[str]
    priority: NotRequired[str]
    correctiveAction: NotRequired[str]


class Classification(TypedDict):
    """Result of ClassificationEngine.classify()."""

    status: RecordStatus
    complianceStatus: NotRequired[ComplianceStatus]


class RecordSubmission(TypedDict):
    """One completed execution of a schedule, with derived fields filled in."""

    completedDate: ISODate
    startTime: TimeOfDay
    endTime: TimeOfDay
    actualDuration: float  # hours
    categoryResults: list[CategoryResult]
    overallScore: int
    completionStats: CompletionStats
    status: RecordStatus
    totalTimeSpent: int  # minutes
    adminVerified: bool
    scheduleId: NotRequired[ScheduleId]
    notes: NotRequired[str]
    complianceStatus: NotRequired[ComplianceStatus]  # safety only
    violations: NotRequired[list[Violation]]  # safety only
    correctiveActionsRequired: NotRequired[bool]  # safety only


# =============================================================================
# Dashboard Statistics
# =============================================================================


class MaintenanceStats(TypedDict):
    """Summary widgets of the maintenance dashboard."""

    totalSchedules: int
    activeSchedules: int
    overdueSchedules: int
    completedThisMonth: int
    pendingVerification: int
    averageCompletionTime: float  # hours


class SafetyInspectionStats(TypedDict):
    """Summary widgets of the safety-inspection dashboard."""

    totalSchedules: int
    activeSchedules: int
    overdueSchedules: int
    completedThisMonth: int
    pendingVerification: int
    averageComplianceScore: int
    openViolations: int
    criticalViolations: int
    averageInspectionTime: float  # hours, 1 dp
    complianceRate: int  # percentage


# Validation result: {field: error_key}
ValidationErrors = dict[str, str]
