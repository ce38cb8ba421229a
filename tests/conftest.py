"""Shared fixtures for facility compliance tests."""

from collections.abc import Iterator

import pytest

from facility_compliance.profiles import (
    MAINTENANCE_PROFILE,
    SAFETY_PROFILE,
    DomainProfile,
)
from facility_compliance.utils import dt_utils


@pytest.fixture(autouse=True)
def reset_default_timezone() -> Iterator[None]:
    """Run every test in UTC and restore the module default afterwards."""
    previous = dt_utils.get_default_timezone()
    dt_utils.set_default_timezone("UTC")
    yield
    dt_utils.set_default_timezone(previous)


@pytest.fixture
def maintenance_profile() -> DomainProfile:
    """Return the built-in maintenance profile."""
    return MAINTENANCE_PROFILE


@pytest.fixture
def safety_profile() -> DomainProfile:
    """Return the built-in safety-inspection profile."""
    return SAFETY_PROFILE
