"""Caller-side evaluation of reported risk against registrar thresholds.

The registrar only stores thresholds. Hosts that gate an operation on the
authority's (category, risk score) report use these helpers, which fall back
to the `Category.ALL` threshold when the category has none of its own.
"""

from __future__ import annotations

from collections.abc import Mapping

import structlog

from aml_registrar.aml.category import Category
from aml_registrar.aml.registrar import MAX_RISK_LEVEL, RiskScore
from aml_registrar.core.errors import InvalidRiskScore, NotFoundError, RiskNotAccepted
from aml_registrar.core.metrics import aml_registrar_risk_checks_total

logger = structlog.get_logger(__name__)


def accepted_risk_for(thresholds: Mapping[Category, RiskScore], category: Category) -> RiskScore:
    """Threshold for the category, or the default (All) threshold if it has none."""
    accepted = thresholds.get(category)
    if accepted is not None:
        return accepted
    try:
        return thresholds[Category.ALL]
    except KeyError:
        raise NotFoundError("No default (All) threshold configured") from None


def _validate_reported_score(risk_score: RiskScore) -> None:
    # Reported scores may be 0, unlike stored thresholds.
    if isinstance(risk_score, bool) or not isinstance(risk_score, int):
        raise InvalidRiskScore(
            f"Reported risk score must be an integer, got {type(risk_score).__name__}",
            risk_score=risk_score,
        )
    if not 0 <= risk_score <= MAX_RISK_LEVEL:
        raise InvalidRiskScore(
            f"Reported risk score {risk_score} is outside 0..{MAX_RISK_LEVEL}",
            risk_score=risk_score,
        )


def is_risk_accepted(
    thresholds: Mapping[Category, RiskScore],
    category: Category,
    risk_score: RiskScore,
) -> bool:
    """Return True if the reported score does not exceed the accepted threshold.

    Category.NONE means the authority has no record for the address and is
    always accepted.
    """
    _validate_reported_score(risk_score)

    if category == Category.NONE:
        accepted = True
    else:
        accepted = risk_score <= accepted_risk_for(thresholds, category)

    aml_registrar_risk_checks_total.labels(
        category=category.value,
        outcome="accepted" if accepted else "rejected",
    ).inc()
    return accepted


def assert_risk_accepted(
    thresholds: Mapping[Category, RiskScore],
    category: Category,
    risk_score: RiskScore,
) -> None:
    """Raise RiskNotAccepted if the reported score exceeds the accepted threshold."""
    if is_risk_accepted(thresholds, category, risk_score):
        return

    accepted_risk_score = accepted_risk_for(thresholds, category)
    logger.info(
        "AML risk not accepted",
        category=category.value,
        risk_score=risk_score,
        accepted_risk_score=accepted_risk_score,
    )
    raise RiskNotAccepted(
        f"Risk score {risk_score} for {category.value} exceeds accepted {accepted_risk_score}",
        category=category.value,
        risk_score=risk_score,
        accepted_risk_score=accepted_risk_score,
    )
