"""Domain profiles for the facility compliance engine.

The maintenance and safety-inspection editors apply different duration and
classification policies. Rather than branching on the domain name inside the
engines, each policy is a named DomainProfile passed explicitly by the caller.

Profiles are immutable. Use build_profile() to derive a profile with
site-specific overrides from an options dict (CONF_* keys).
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

import voluptuous as vol

from . import const
from .schemas import PROFILE_OPTIONS_SCHEMA


@dataclass(frozen=True)
class DomainProfile:
    """Policy bundle selected by the calling domain.

    Attributes:
        domain: DOMAIN_* constant identifying the profile
        min_duration_hours: Floor applied to computed durations (None = no floor)
        max_duration_hours: Ceiling applied to computed durations (None = no cap)
        max_overnight_hours: Overnight spans longer than this are rejected
                             (None = accept any overnight span)
        duration_precision: Decimal places for durations (None = unrounded)
        strict_validation: Raise on malformed times instead of recovering
        partial_threshold: Lowest completion percentage for partially_completed
        scores_compliance: Whether records carry a complianceStatus
        non_compliant_below: Scores under this are non_compliant
        requires_attention_below: Scores under this require attention
    """

    domain: str
    min_duration_hours: float | None
    max_duration_hours: float | None
    max_overnight_hours: float | None
    duration_precision: int | None
    strict_validation: bool
    partial_threshold: int
    scores_compliance: bool
    non_compliant_below: int = const.DEFAULT_NON_COMPLIANT_BELOW
    requires_attention_below: int = const.DEFAULT_REQUIRES_ATTENTION_BELOW

    @property
    def is_safety(self) -> bool:
        """Return True for the safety-inspection domain."""
        return self.domain == const.DOMAIN_SAFETY


MAINTENANCE_PROFILE = DomainProfile(
    domain=const.DOMAIN_MAINTENANCE,
    min_duration_hours=const.DEFAULT_MAINTENANCE_MIN_DURATION_HOURS,
    max_duration_hours=None,
    max_overnight_hours=None,
    duration_precision=None,
    strict_validation=False,
    partial_threshold=const.DEFAULT_MAINTENANCE_PARTIAL_THRESHOLD,
    scores_compliance=False,
)

SAFETY_PROFILE = DomainProfile(
    domain=const.DOMAIN_SAFETY,
    min_duration_hours=None,
    max_duration_hours=const.DEFAULT_SAFETY_MAX_DURATION_HOURS,
    max_overnight_hours=const.DEFAULT_SAFETY_MAX_OVERNIGHT_HOURS,
    duration_precision=const.DATA_FLOAT_PRECISION,
    strict_validation=True,
    partial_threshold=const.DEFAULT_SAFETY_PARTIAL_THRESHOLD,
    scores_compliance=True,
)

_PROFILES: dict[str, DomainProfile] = {
    const.DOMAIN_MAINTENANCE: MAINTENANCE_PROFILE,
    const.DOMAIN_SAFETY: SAFETY_PROFILE,
}

# Options key -> DomainProfile attribute
_OPTION_FIELDS: dict[str, str] = {
    const.CONF_MIN_DURATION_HOURS: "min_duration_hours",
    const.CONF_MAX_DURATION_HOURS: "max_duration_hours",
    const.CONF_MAX_OVERNIGHT_HOURS: "max_overnight_hours",
    const.CONF_DURATION_PRECISION: "duration_precision",
    const.CONF_PARTIAL_THRESHOLD: "partial_threshold",
    const.CONF_NON_COMPLIANT_BELOW: "non_compliant_below",
    const.CONF_REQUIRES_ATTENTION_BELOW: "requires_attention_below",
    const.CONF_STRICT_VALIDATION: "strict_validation",
}


def get_profile(domain: str) -> DomainProfile:
    """Return the built-in profile for a domain.

    Raises:
        KeyError: If the domain is unknown.
    """
    try:
        return _PROFILES[domain]
    except KeyError:
        raise KeyError(
            f"Unknown domain '{domain}', expected one of {const.DOMAIN_OPTIONS}"
        ) from None


def build_profile(
    domain: str, options: dict[str, Any] | None = None
) -> DomainProfile:
    """Build a profile for `domain` with option overrides applied.

    Options are validated against PROFILE_OPTIONS_SCHEMA; unknown keys and
    out-of-range values raise voluptuous.Invalid.

    Example:
        profile = build_profile(
            const.DOMAIN_SAFETY,
            {const.CONF_MAX_OVERNIGHT_HOURS: 10},
        )
    """
    base = get_profile(domain)
    if not options:
        return base

    validated = PROFILE_OPTIONS_SCHEMA(dict(options))
    overrides = {_OPTION_FIELDS[key]: value for key, value in validated.items()}
    profile = replace(base, **overrides)

    if profile.requires_attention_below < profile.non_compliant_below:
        raise vol.Invalid(
            f"{const.CONF_REQUIRES_ATTENTION_BELOW} "
            f"({profile.requires_attention_below}) must not be lower than "
            f"{const.CONF_NON_COMPLIANT_BELOW} ({profile.non_compliant_below})"
        )

    # Tolerant profiles recover missing times to the floor
    if not profile.strict_validation and not profile.min_duration_hours:
        raise vol.Invalid(
            f"{const.CONF_MIN_DURATION_HOURS} must be positive when "
            f"{const.CONF_STRICT_VALIDATION} is off"
        )

    const.LOGGER.debug(
        "build_profile: %s profile with overrides %s", domain, sorted(overrides)
    )
    return profile
