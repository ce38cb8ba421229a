"""Wire-format payload factories for tests."""

from typing import Any

from facility_compliance import const


def make_item(
    item_id: str,
    completed: bool,
    status: str | None = None,
    **extra: Any,
) -> dict[str, Any]:
    """Create a checklist item dict."""
    item: dict[str, Any] = {
        const.DATA_ITEM_ID: item_id,
        const.DATA_ITEM_DESCRIPTION: f"Check {item_id}",
        const.DATA_ITEM_IS_REQUIRED: True,
        const.DATA_ITEM_COMPLETED: completed,
    }
    if status is not None:
        item[const.DATA_ITEM_STATUS] = status
    item.update(extra)
    return item


def make_category(
    category_id: str,
    weight: float,
    items: list[dict[str, Any]],
    time_spent: int = 0,
) -> dict[str, Any]:
    """Create a category dict."""
    return {
        const.DATA_CATEGORY_ID: category_id,
        const.DATA_CATEGORY_NAME: category_id.title(),
        const.DATA_CATEGORY_WEIGHT: weight,
        const.DATA_CATEGORY_TIME_SPENT: time_spent,
        const.DATA_CATEGORY_ITEMS: items,
    }


def make_schedule(
    frequency: str,
    start_date: str,
    next_due_date: str | None = None,
    status: str = const.SCHEDULE_STATUS_ACTIVE,
    **extra: Any,
) -> dict[str, Any]:
    """Create a schedule dict."""
    schedule: dict[str, Any] = {
        const.DATA_SCHEDULE_FREQUENCY: frequency,
        const.DATA_SCHEDULE_START_DATE: start_date,
        const.DATA_SCHEDULE_STATUS: status,
    }
    if next_due_date is not None:
        schedule[const.DATA_SCHEDULE_NEXT_DUE_DATE] = next_due_date
    schedule.update(extra)
    return schedule


def make_record(
    completed_date: str,
    status: str,
    actual_duration: float = 1.0,
    admin_verified: bool = False,
    **extra: Any,
) -> dict[str, Any]:
    """Create a stored (already derived) record dict for statistics tests."""
    record: dict[str, Any] = {
        const.DATA_RECORD_COMPLETED_DATE: completed_date,
        const.DATA_RECORD_STATUS: status,
        const.DATA_RECORD_ACTUAL_DURATION: actual_duration,
        const.DATA_RECORD_ADMIN_VERIFIED: admin_verified,
    }
    record.update(extra)
    return record
