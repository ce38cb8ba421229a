# File: utils/math_utils.py
"""Math and calculation utilities for the facility compliance engine.

Pure Python math functions shared by the engines.

⚠️ UTILS PURITY: NO imports from engines, builders or const.py in this module.

Functions:
    - round_half_up: Integer rounding that sends .5 away from zero
    - round_hours: Consistent rounding of durations to configured precision
    - calculate_percentage: Integer percentage with division-by-zero protection
    - weighted_mean: Weight-normalized mean with zero-weight protection
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal
import logging

_LOGGER = logging.getLogger(__name__)

# ==============================================================================
# Constants
# ==============================================================================

# Default float precision for duration rounding
DATA_FLOAT_PRECISION = 2


# ==============================================================================
# Rounding
# ==============================================================================


def round_half_up(value: float) -> int:
    """Round to the nearest integer, sending halves away from zero.

    Python's built-in round() uses banker's rounding (12.5 -> 12). Scores and
    percentages shown on the dashboard round halves up, so 12.5 -> 13.

    Examples:
        round_half_up(66.666) → 67
        round_half_up(12.5) → 13
        round_half_up(80.2) → 80
    """
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def round_hours(value: float, precision: int = DATA_FLOAT_PRECISION) -> float:
    """Round an hour value to the configured precision.

    Prevents float arithmetic drift (e.g., 3.9999999999999996 → 4.0).

    Examples:
        round_hours(1.3333) → 1.33
        round_hours(4.0) → 4.0
    """
    return round(value, precision)


# ==============================================================================
# Ratios
# ==============================================================================


def calculate_percentage(part: float, total: float) -> int:
    """Calculate an integer percentage (0-100) with half-up rounding.

    Returns:
        Percentage, or 0 if total is 0 or negative.

    Examples:
        calculate_percentage(2, 3) → 67
        calculate_percentage(4, 5) → 80
        calculate_percentage(5, 0) → 0  # Division by zero protection
    """
    if total <= 0:
        return 0
    return round_half_up((part / total) * 100)


def weighted_mean(pairs: Iterable[tuple[float, float]]) -> int:
    """Weight-normalized mean of (value, weight) pairs, rounded half-up.

    Negative weights are treated as 0. Returns 0 when the weight sum is 0.

    Examples:
        weighted_mean([(100, 70), (0, 30)]) → 70
        weighted_mean([(67, 60), (100, 40)]) → 80
        weighted_mean([(90, 0)]) → 0
    """
    weighted_sum = 0.0
    weight_total = 0.0
    for value, weight in pairs:
        effective_weight = max(0.0, weight)
        weighted_sum += value * effective_weight
        weight_total += effective_weight

    if weight_total <= 0:
        _LOGGER.debug("weighted_mean: total weight is 0, returning 0")
        return 0
    return round_half_up(weighted_sum / weight_total)
