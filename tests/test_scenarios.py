"""End-to-end scenarios: editor payload in, complete record out.

Each YAML file in tests/scenarios/ is one editor submission. The schedule (if
any) goes through build_schedule(), the record through
build_record_submission(), and the results are compared against the
expectations in the file.
"""

from pathlib import Path

import pytest

from facility_compliance import const
from facility_compliance.data_builders import (
    DataValidationError,
    build_record_submission,
    build_schedule,
)
from tests.helpers import load_scenario, scenario_paths


@pytest.mark.parametrize("scenario_path", scenario_paths(), ids=lambda p: p.stem)
def test_scenario(scenario_path: Path) -> None:
    """Build the scenario's schedule and record and check every expectation."""
    scenario = load_scenario(scenario_path)
    profile = scenario.profile

    schedule = None
    if scenario.schedule is not None:
        schedule = build_schedule(scenario.schedule, profile)
        for key, value in scenario.expected_schedule.items():
            assert schedule[key] == value, f"schedule {key}"

    if scenario.expected_errors:
        with pytest.raises(DataValidationError) as exc_info:
            build_record_submission(scenario.record, profile, schedule)
        assert exc_info.value.errors == scenario.expected_errors
        return

    record = build_record_submission(scenario.record, profile, schedule)

    for key, value in scenario.expected.items():
        assert record[key] == value, f"record {key}"

    scores = {
        category[const.DATA_CATEGORY_ID]: category[const.DATA_CATEGORY_SCORE]
        for category in record[const.DATA_RECORD_CATEGORY_RESULTS]
    }
    for category_id, score in scenario.expected_category_scores.items():
        assert scores[category_id] == score, f"category {category_id}"

    for key in scenario.expected_absent:
        assert key not in record


def test_scenario_files_present() -> None:
    """The scenario directory is not empty (guards against a bad glob)."""
    assert len(scenario_paths()) >= 5


def test_load_scenario_resolves_relative_path() -> None:
    """Relative names resolve against tests/scenarios/."""
    scenario = load_scenario("safety_overnight_too_long.yaml")

    assert scenario.domain == const.DOMAIN_SAFETY
    assert scenario.record[const.DATA_RECORD_START_TIME] == "18:00"


def test_load_scenario_missing_file() -> None:
    """A missing file raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        load_scenario("does_not_exist.yaml")
