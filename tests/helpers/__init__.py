"""Test helpers for facility compliance tests.

Import from here rather than the individual modules:

    from tests.helpers import make_category, make_item, load_scenario
"""

from .factories import make_category, make_item, make_record, make_schedule
from .scenarios import SCENARIO_DIR, Scenario, load_scenario, scenario_paths

__all__ = [
    "SCENARIO_DIR",
    "Scenario",
    "load_scenario",
    "make_category",
    "make_item",
    "make_record",
    "make_schedule",
    "scenario_paths",
]
