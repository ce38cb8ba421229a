"""Classification Engine - Maps scores onto record status enums.

Two independent axes:
- status: completion-based (completed / partially_completed / failed), with
  the partially_completed threshold taken from the DomainProfile
  (50 maintenance, 70 safety).
- complianceStatus: score- and violation-based, only for profiles that score
  compliance (safety). Rules are evaluated in order and short-circuit:
    1. score < 80 OR any high/critical violation → non_compliant
    2. score < 95 OR any violation → requires_attention
    3. otherwise → compliant

The mapping is total and never raises. Missing or unusable inputs resolve to
the most conservative classification (failed / non_compliant).
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from .. import const

if TYPE_CHECKING:
    from ..profiles import DomainProfile
    from ..type_defs import Classification, Violation


def _coerce_score(value: Any) -> float | None:
    """Return a numeric score, or None when the value is unusable."""
    if value is None or isinstance(value, bool):
        return None
    try:
        score = float(value)
    except (TypeError, ValueError):
        return None
    if score != score:  # NaN
        return None
    return score


class ClassificationEngine:
    """Pure logic engine for record status classification.

    All methods are static - no instance state.
    """

    @staticmethod
    def classify_status(percentage: Any, profile: DomainProfile) -> str:
        """Classify completion percentage into a record status.

        Examples (maintenance, threshold 50):
            100 → completed
            50 → partially_completed
            49 → failed
        """
        value = _coerce_score(percentage)
        if value is None:
            const.LOGGER.debug(
                "classify_status: unusable percentage %r, classifying as failed",
                percentage,
            )
            return const.RECORD_STATUS_FAILED

        if value >= const.SCORE_MAX:
            return const.RECORD_STATUS_COMPLETED
        if value >= profile.partial_threshold:
            return const.RECORD_STATUS_PARTIALLY_COMPLETED
        return const.RECORD_STATUS_FAILED

    @staticmethod
    def is_blocking_violation(violation: Violation) -> bool:
        """Return True for a high/critical violation.

        A violation with a missing or unrecognised risk level is treated as
        blocking.
        """
        risk_level = violation.get(const.DATA_VIOLATION_RISK_LEVEL)
        if risk_level not in const.RISK_LEVEL_OPTIONS:
            const.LOGGER.debug(
                "Violation %s has unknown risk level %r, treating as high risk",
                violation.get(const.DATA_VIOLATION_ID),
                risk_level,
            )
            return True
        return risk_level in const.BLOCKING_RISK_LEVELS

    @staticmethod
    def classify_compliance(
        score: Any,
        violations: Sequence[Violation] | None,
        profile: DomainProfile,
    ) -> str:
        """Classify overall compliance score plus violations.

        Examples:
            96, no violations → compliant
            96, one critical violation → non_compliant
            96, one low violation → requires_attention
            80, no violations → requires_attention
            79, no violations → non_compliant
        """
        value = _coerce_score(score)
        violations = violations or []

        if value is None:
            const.LOGGER.debug(
                "classify_compliance: unusable score %r, classifying as non_compliant",
                score,
            )
            return const.COMPLIANCE_STATUS_NON_COMPLIANT

        if value < profile.non_compliant_below or any(
            ClassificationEngine.is_blocking_violation(v) for v in violations
        ):
            return const.COMPLIANCE_STATUS_NON_COMPLIANT

        if value < profile.requires_attention_below or len(violations) > 0:
            return const.COMPLIANCE_STATUS_REQUIRES_ATTENTION

        return const.COMPLIANCE_STATUS_COMPLIANT

    @staticmethod
    def classify(
        completion_percentage: Any,
        profile: DomainProfile,
        overall_score: Any = None,
        violations: Sequence[Violation] | None = None,
    ) -> Classification:
        """Classify a record on both axes.

        Returns:
            {"status": ...} plus "complianceStatus" when the profile scores
            compliance.
        """
        result: dict[str, str] = {
            const.DATA_RECORD_STATUS: ClassificationEngine.classify_status(
                completion_percentage, profile
            )
        }
        if profile.scores_compliance:
            result[const.DATA_RECORD_COMPLIANCE_STATUS] = (
                ClassificationEngine.classify_compliance(
                    overall_score, violations, profile
                )
            )

        const.LOGGER.debug(
            "classify: completion=%s score=%s violations=%d -> %s",
            completion_percentage,
            overall_score,
            len(violations or []),
            result,
        )
        return result  # type: ignore[return-value]
