# File: schemas.py
"""Voluptuous schemas for payloads coming from the schedule and record editors.

Schemas check STRUCTURE (types, enums, ranges). Business rules that need a
specific, field-level error key (missing end time, implausible overnight span,
non-positive custom days under strict validation) live in data_builders.py so
the editors can show an actionable message next to the failing field.

All record/schedule schemas use extra=vol.ALLOW_EXTRA: the dashboard sends
display-only fields (assetName, technician, images, ...) that pass through.
"""

from __future__ import annotations

from typing import Any

import voluptuous as vol

from . import const
from .utils.dt_utils import dt_parse_date, dt_parse_time

# =============================================================================
# INPUT VALIDATION HELPERS
# =============================================================================


def valid_date(value: Any) -> Any:
    """Validate a calendar date (date object or ISO/US date string).

    Returns:
        Original value if valid

    Raises:
        vol.Invalid: If the value is not a parseable calendar date
    """
    if dt_parse_date(value) is None:
        raise vol.Invalid(f"Invalid date: '{value}'. Expected format: 'YYYY-MM-DD'.")
    return value


def valid_time_of_day(value: Any) -> Any:
    """Validate an HH:MM time-of-day string.

    Empty strings are accepted so that a missing time can be reported with its
    own error key by the record validation.

    Raises:
        vol.Invalid: If the value is not HH:MM or out of range
    """
    if value in (None, ""):
        return value
    if dt_parse_time(value) is None:
        raise vol.Invalid(f"Invalid time: '{value}'. Expected format: 'HH:MM'.")
    return value


_WEIGHT = vol.All(
    vol.Coerce(float), vol.Range(min=const.SCORE_MIN, max=const.SCORE_MAX)
)
_NON_NEGATIVE_HOURS = vol.All(vol.Coerce(float), vol.Range(min=0))
_PERCENT = vol.All(vol.Coerce(int), vol.Range(min=const.SCORE_MIN, max=const.SCORE_MAX))


# ----------------------------------------------------------------------------------
# CHECKLIST SCHEMAS
# ----------------------------------------------------------------------------------

CHECKLIST_ITEM_SCHEMA = vol.Schema(
    {
        vol.Required(const.DATA_ITEM_ID): vol.Coerce(str),
        vol.Optional(const.DATA_ITEM_DESCRIPTION, default=""): str,
        vol.Optional(const.DATA_ITEM_IS_REQUIRED, default=False): bool,
        vol.Optional(const.DATA_ITEM_COMPLETED, default=False): bool,
        vol.Optional(const.DATA_ITEM_STATUS): vol.In(
            const.MAINTENANCE_ITEM_STATUS_OPTIONS + const.SAFETY_ITEM_STATUS_OPTIONS
        ),
        vol.Optional(const.DATA_ITEM_RISK_LEVEL): vol.In(const.RISK_LEVEL_OPTIONS),
        vol.Optional(const.DATA_ITEM_NOTES): vol.Any(None, str),
        vol.Optional(const.DATA_ITEM_CORRECTIVE_ACTION): vol.Any(None, str),
    },
    extra=vol.ALLOW_EXTRA,
)

CATEGORY_SCHEMA = vol.Schema(
    {
        vol.Required(const.DATA_CATEGORY_ID): vol.Coerce(str),
        vol.Optional(const.DATA_CATEGORY_NAME, default=""): str,
        vol.Optional(const.DATA_CATEGORY_WEIGHT, default=0): _WEIGHT,
        vol.Optional(const.DATA_CATEGORY_TIME_SPENT, default=0): vol.All(
            vol.Coerce(int), vol.Range(min=0)
        ),
        vol.Optional(const.DATA_CATEGORY_ITEMS, default=list): [CHECKLIST_ITEM_SCHEMA],
    },
    extra=vol.ALLOW_EXTRA,
)

VIOLATION_SCHEMA = vol.Schema(
    {
        vol.Required(const.DATA_VIOLATION_ID): vol.Coerce(str),
        vol.Optional(const.DATA_VIOLATION_DESCRIPTION, default=""): str,
        # Missing risk level is tolerated; the classifier treats it as high risk
        vol.Optional(const.DATA_VIOLATION_RISK_LEVEL): vol.In(const.RISK_LEVEL_OPTIONS),
        vol.Optional(const.DATA_VIOLATION_STATUS, default=const.VIOLATION_STATUS_OPEN): (
            vol.In(const.VIOLATION_STATUS_OPTIONS)
        ),
        vol.Optional(const.DATA_VIOLATION_PRIORITY): vol.In(
            const.VIOLATION_PRIORITY_OPTIONS
        ),
        vol.Optional(const.DATA_VIOLATION_CORRECTIVE_ACTION): vol.Any(None, str),
    },
    extra=vol.ALLOW_EXTRA,
)


# ----------------------------------------------------------------------------------
# SCHEDULE / RECORD SCHEMAS
# ----------------------------------------------------------------------------------

SCHEDULE_SCHEMA = vol.Schema(
    {
        vol.Required(const.DATA_SCHEDULE_FREQUENCY): vol.In(const.FREQUENCY_OPTIONS),
        vol.Required(const.DATA_SCHEDULE_START_DATE): valid_date,
        # Range is a business rule (default 30 vs. strict rejection), not structure
        vol.Optional(const.DATA_SCHEDULE_CUSTOM_FREQUENCY_DAYS): vol.Any(
            None, int, float, str
        ),
        vol.Optional(
            const.DATA_SCHEDULE_STATUS, default=const.SCHEDULE_STATUS_ACTIVE
        ): vol.In(const.SCHEDULE_STATUS_OPTIONS),
        vol.Optional(const.DATA_SCHEDULE_LAST_COMPLETED_DATE): vol.Any(
            None, valid_date
        ),
    },
    extra=vol.ALLOW_EXTRA,
)

RECORD_SCHEMA = vol.Schema(
    {
        vol.Required(const.DATA_RECORD_COMPLETED_DATE): valid_date,
        vol.Optional(const.DATA_RECORD_START_TIME, default=""): vol.Any(
            None, valid_time_of_day
        ),
        vol.Optional(const.DATA_RECORD_END_TIME, default=""): vol.Any(
            None, valid_time_of_day
        ),
        vol.Optional(const.DATA_RECORD_CATEGORY_RESULTS, default=list): [
            CATEGORY_SCHEMA
        ],
        vol.Optional(const.DATA_RECORD_GENERAL_CHECKLIST, default=list): [
            CHECKLIST_ITEM_SCHEMA
        ],
        vol.Optional(const.DATA_RECORD_VIOLATIONS, default=list): [VIOLATION_SCHEMA],
        vol.Optional(const.DATA_RECORD_NOTES): vol.Any(None, str),
    },
    extra=vol.ALLOW_EXTRA,
)


# ----------------------------------------------------------------------------------
# PROFILE OPTIONS SCHEMA
# ----------------------------------------------------------------------------------

PROFILE_OPTIONS_SCHEMA = vol.Schema(
    {
        vol.Optional(const.CONF_MIN_DURATION_HOURS): vol.Any(None, _NON_NEGATIVE_HOURS),
        vol.Optional(const.CONF_MAX_DURATION_HOURS): vol.Any(None, _NON_NEGATIVE_HOURS),
        vol.Optional(const.CONF_MAX_OVERNIGHT_HOURS): vol.Any(
            None,
            vol.All(
                vol.Coerce(float), vol.Range(min=0, max=const.HOURS_PER_DAY)
            ),
        ),
        vol.Optional(const.CONF_DURATION_PRECISION): vol.Any(
            None, vol.All(vol.Coerce(int), vol.Range(min=0, max=6))
        ),
        vol.Optional(const.CONF_PARTIAL_THRESHOLD): _PERCENT,
        vol.Optional(const.CONF_NON_COMPLIANT_BELOW): _PERCENT,
        vol.Optional(const.CONF_REQUIRES_ATTENTION_BELOW): _PERCENT,
        vol.Optional(const.CONF_STRICT_VALIDATION): bool,
    }
)
