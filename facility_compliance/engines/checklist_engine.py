"""Checklist Engine - Pure logic for checklist completion and compliance scores.

This engine provides stateless, pure Python functions for:
- Deciding whether a single checklist item counts as passing
- Category compliance scores (share of passing items, 0-100)
- Weight-normalized overall score across categories
- Flat completion statistics across every category
- Rebuilding category dicts with derived scores filled in

ARCHITECTURE: Callers re-derive every score on every item or weight change.
There is no running total or cache; inputs are never mutated.

Scoring rules:
- Maintenance: an item passes when `completed` is true.
- Safety: an item passes when `completed` is true AND its status is
  compliant or not_applicable.
- An empty category scores 0 (it never contributes full marks).
- A zero total weight yields an overall score of 0.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING, Any

from .. import const
from ..utils.math_utils import calculate_percentage, weighted_mean

if TYPE_CHECKING:
    from ..profiles import DomainProfile
    from ..type_defs import CategoryResult, ChecklistItemResult, CompletionStats


class ChecklistEngine:
    """Pure logic engine for checklist aggregation.

    All methods are static - no instance state.
    """

    # =========================================================================
    # Item level
    # =========================================================================

    @staticmethod
    def is_item_passing(item: ChecklistItemResult, profile: DomainProfile) -> bool:
        """Return True if the item contributes to the category numerator.

        `completed` is necessary but not sufficient under a compliance-scoring
        profile: the explicit status must also be compliant/not_applicable.
        """
        if not item.get(const.DATA_ITEM_COMPLETED, False):
            return False
        if not profile.scores_compliance:
            return True
        return item.get(const.DATA_ITEM_STATUS) in const.SAFETY_PASSING_ITEM_STATUSES

    # =========================================================================
    # Category level
    # =========================================================================

    @staticmethod
    def calculate_category_score(
        items: Sequence[ChecklistItemResult], profile: DomainProfile
    ) -> int:
        """Return round(100 * passing / total) for one category.

        Examples:
            2 of 3 passing → 67
            0 items → 0
        """
        total = len(items)
        if total == 0:
            const.LOGGER.debug("calculate_category_score: empty category scores 0")
            return 0

        passing = sum(
            1 for item in items if ChecklistEngine.is_item_passing(item, profile)
        )
        return calculate_percentage(passing, total)

    @staticmethod
    def apply_category_scores(
        categories: Iterable[CategoryResult], profile: DomainProfile
    ) -> list[CategoryResult]:
        """Return copies of the categories with categoryComplianceScore derived.

        Each call recomputes from the items; any stale score on the input is
        ignored and the input dicts are left untouched.
        """
        scored: list[CategoryResult] = []
        for category in categories:
            items = category.get(const.DATA_CATEGORY_ITEMS) or []
            updated: dict[str, Any] = dict(category)
            updated[const.DATA_CATEGORY_ITEMS] = [dict(item) for item in items]
            updated[const.DATA_CATEGORY_SCORE] = ChecklistEngine.calculate_category_score(
                items, profile
            )
            scored.append(updated)  # type: ignore[arg-type]
        return scored

    @staticmethod
    def build_general_category(
        items: Sequence[ChecklistItemResult], time_spent: int = 0
    ) -> CategoryResult:
        """Wrap loose checklist items in the implicit maintenance category.

        Used when a maintenance record has no explicit categories: the whole
        checklist becomes one category with weight 100.
        """
        return {
            const.DATA_CATEGORY_ID: const.GENERAL_CATEGORY_ID,
            const.DATA_CATEGORY_NAME: const.GENERAL_CATEGORY_NAME,
            const.DATA_CATEGORY_WEIGHT: const.GENERAL_CATEGORY_WEIGHT,
            const.DATA_CATEGORY_TIME_SPENT: time_spent,
            const.DATA_CATEGORY_ITEMS: [dict(item) for item in items],  # type: ignore[misc]
        }

    # =========================================================================
    # Schedule level
    # =========================================================================

    @staticmethod
    def calculate_overall_score(categories: Iterable[CategoryResult]) -> int:
        """Return the weight-normalized mean of the category scores.

        Uses each category's categoryComplianceScore as given; run
        apply_category_scores() first when items may have changed.

        Examples:
            scores 100/0, weights 70/30 → 70
            scores 67/100, weights 60/40 → 80
            all weights 0 → 0
        """
        return weighted_mean(
            (
                float(category.get(const.DATA_CATEGORY_SCORE) or 0),
                float(category.get(const.DATA_CATEGORY_WEIGHT) or 0),
            )
            for category in categories
        )

    @staticmethod
    def calculate_completion_stats(
        categories: Iterable[CategoryResult],
    ) -> CompletionStats:
        """Count completed items across every category (flattened).

        Completion ignores item status: only the `completed` flag counts.

        Returns:
            {"completed": n, "total": m, "percentage": round(100 * n / m)}
            with percentage 0 when there are no items.
        """
        completed = 0
        total = 0
        for category in categories:
            for item in category.get(const.DATA_CATEGORY_ITEMS) or []:
                total += 1
                if item.get(const.DATA_ITEM_COMPLETED, False):
                    completed += 1

        return {
            const.DATA_STATS_COMPLETED: completed,
            const.DATA_STATS_TOTAL: total,
            const.DATA_STATS_PERCENTAGE: calculate_percentage(completed, total),
        }  # type: ignore[return-value]

    @staticmethod
    def calculate_total_time_spent(categories: Iterable[CategoryResult]) -> int:
        """Sum the user-entered timeSpent minutes across categories."""
        total = 0
        for category in categories:
            try:
                total += max(0, int(category.get(const.DATA_CATEGORY_TIME_SPENT) or 0))
            except (TypeError, ValueError):
                const.LOGGER.warning(
                    "Ignoring non-numeric timeSpent %r in category %s",
                    category.get(const.DATA_CATEGORY_TIME_SPENT),
                    category.get(const.DATA_CATEGORY_ID),
                )
        return total

    @staticmethod
    def has_corrective_findings(categories: Iterable[CategoryResult]) -> bool:
        """Return True if any item is marked non_compliant or requires_attention."""
        return any(
            item.get(const.DATA_ITEM_STATUS) in const.SAFETY_FINDING_ITEM_STATUSES
            for category in categories
            for item in category.get(const.DATA_CATEGORY_ITEMS) or []
        )
