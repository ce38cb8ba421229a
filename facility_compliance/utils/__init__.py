# File: utils/__init__.py
"""Pure Python utilities for the facility compliance engine.

Submodules:
    - dt_utils: Date/time parsing, time-of-day handling, calendar intervals
    - math_utils: Half-up rounding, percentages, weighted means

Usage:
    from . import dt_utils
    from .math_utils import round_half_up
"""

from . import dt_utils, math_utils

__all__ = ["dt_utils", "math_utils"]
