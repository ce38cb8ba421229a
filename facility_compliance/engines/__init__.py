"""Engine modules for the facility compliance engine.

Contains specialized computation engines:
- schedule_engine: Next due date projection and overdue detection
- duration_engine: Actual duration from start/end times (midnight rollover)
- checklist_engine: Category/overall compliance scores and completion stats
- classification_engine: Record status and compliance status mapping
- statistics_engine: Dashboard summary figures
"""

from .checklist_engine import ChecklistEngine
from .classification_engine import ClassificationEngine
from .duration_engine import DurationEngine, DurationValidationError
from .schedule_engine import (
    RecurrenceEngine,
    calculate_next_due_date,
    derive_schedule_status,
)
from .statistics_engine import StatisticsEngine

__all__ = [
    "ChecklistEngine",
    "ClassificationEngine",
    "DurationEngine",
    "DurationValidationError",
    "RecurrenceEngine",
    "StatisticsEngine",
    "calculate_next_due_date",
    "derive_schedule_status",
]
