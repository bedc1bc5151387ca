"""AML registrar: the authority account and its accepted risk thresholds.

The registrar stores one accepted-risk ceiling per category plus the
wildcard `Category.ALL` default. It does not compare reported scores and it
does not fall back to the default on its own; see `aml_registrar.aml.evaluation`
for the caller-side check.

Usage:

    registrar = AmlRegistrar(AccountId("aml.authority"), MAX_RISK_LEVEL // 2)
    registrar.update_category(Category.SCAM, 6)
    authority, conditions = registrar.get_policy()
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import Any, NewType

import structlog

from aml_registrar.aml.category import Category
from aml_registrar.core.errors import (
    InvalidCategory,
    InvalidRiskScore,
    ProtectedCategoryRemoval,
    RegistrarDecodeError,
)
from aml_registrar.core.metrics import aml_registrar_mutations_total
from aml_registrar.utils.constants import MAX_RISK_LEVEL

logger = structlog.get_logger(__name__)

RiskScore = int
CategoryRisk = tuple[Category, RiskScore]
AccountId = NewType("AccountId", str)


def validate_risk_score(risk_score: Any) -> RiskScore:
    """Return the score if it is a legal threshold, else raise InvalidRiskScore."""
    if isinstance(risk_score, bool) or not isinstance(risk_score, int):
        raise InvalidRiskScore(
            f"Risk score must be an integer, got {type(risk_score).__name__}",
            risk_score=risk_score,
        )
    if risk_score > MAX_RISK_LEVEL:
        raise InvalidRiskScore(
            f"Risk score {risk_score} exceeds maximum risk level {MAX_RISK_LEVEL}",
            risk_score=risk_score,
        )
    if risk_score <= 0:
        raise InvalidRiskScore(
            f"Risk score must be greater than 0, got {risk_score}",
            risk_score=risk_score,
        )
    return risk_score


def _coerce_category(category: Any, operation: str) -> Category:
    """Return the Category for a member or canonical name, else raise InvalidCategory."""
    try:
        return Category(category)
    except (TypeError, ValueError) as e:
        aml_registrar_mutations_total.labels(operation=operation, status="rejected").inc()
        logger.warning("Rejected unknown AML category", category=repr(category))
        raise InvalidCategory(f"Unknown category: {category!r}", category=category) from e


class AmlRegistrar:
    """Accepted risk thresholds per AML category for one authority.

    Invariants:
    - every stored threshold is in 1..MAX_RISK_LEVEL
    - Category.ALL is always present
    - iteration follows insertion order; overwriting a category keeps its slot

    The registrar does no locking. The host serializes calls.
    """

    def __init__(self, authority: AccountId, accepted_risk_score: RiskScore) -> None:
        self._authority = authority
        self._thresholds: dict[Category, RiskScore] = {}
        self.update_category(Category.ALL, accepted_risk_score)

    @classmethod
    def from_thresholds(
        cls,
        authority: AccountId,
        conditions: Iterable[CategoryRisk],
    ) -> AmlRegistrar:
        """Rebuild a registrar from stored (category, score) pairs, keeping their order."""
        thresholds: dict[Category, RiskScore] = {}
        for raw_category, risk_score in conditions:
            try:
                category = Category(raw_category)
            except ValueError as e:
                raise RegistrarDecodeError(f"Unknown category: {raw_category!r}") from e
            if category in thresholds:
                raise RegistrarDecodeError(
                    f"Duplicate category: {category.value}",
                    details={"category": category.value},
                )
            thresholds[category] = validate_risk_score(risk_score)

        if Category.ALL not in thresholds:
            raise RegistrarDecodeError("Stored conditions have no default (All) threshold")

        registrar = cls.__new__(cls)
        registrar._authority = authority
        registrar._thresholds = thresholds
        return registrar

    @property
    def authority(self) -> AccountId:
        return self._authority

    def get_policy(self) -> tuple[AccountId, list[CategoryRisk]]:
        """Return the authority and a copy of every (category, threshold) pair."""
        return self._authority, list(self._thresholds.items())

    def get_thresholds(self) -> Mapping[Category, RiskScore]:
        """Return a read-only live view of the threshold mapping."""
        return MappingProxyType(self._thresholds)

    def set_authority(self, authority: AccountId) -> None:
        previous = self._authority
        self._authority = authority
        aml_registrar_mutations_total.labels(operation="set_authority", status="success").inc()
        logger.info("AML authority updated", previous_authority=previous, authority=authority)

    def update_category(self, category: Category | str, accepted_risk_score: RiskScore) -> None:
        """Add the category or overwrite its accepted risk score."""
        category = _coerce_category(category, "update_category")
        try:
            validate_risk_score(accepted_risk_score)
        except InvalidRiskScore:
            aml_registrar_mutations_total.labels(
                operation="update_category", status="rejected"
            ).inc()
            logger.warning(
                "Rejected invalid AML risk score",
                category=category.value,
                risk_score=accepted_risk_score,
            )
            raise
        self._thresholds[category] = accepted_risk_score
        aml_registrar_mutations_total.labels(operation="update_category", status="success").inc()
        logger.info(
            "AML category updated",
            category=category.value,
            risk_score=accepted_risk_score,
        )

    def remove_category(self, category: Category | str) -> None:
        """Remove the category's threshold. Removing an absent category is a no-op."""
        category = _coerce_category(category, "remove_category")
        if category == Category.ALL:
            aml_registrar_mutations_total.labels(
                operation="remove_category", status="rejected"
            ).inc()
            logger.warning("Rejected removal of default AML category", category=category.value)
            raise ProtectedCategoryRemoval(
                "The default (All) category cannot be removed",
                category=category.value,
            )
        removed = self._thresholds.pop(category, None)
        aml_registrar_mutations_total.labels(operation="remove_category", status="success").inc()
        logger.info(
            "AML category removed",
            category=category.value,
            was_present=removed is not None,
        )

    def __len__(self) -> int:
        return len(self._thresholds)

    def __iter__(self) -> Iterator[Category]:
        return iter(self._thresholds)

    def __contains__(self, category: object) -> bool:
        return category in self._thresholds

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AmlRegistrar):
            return NotImplemented
        return self._authority == other._authority and self._thresholds == other._thresholds

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        conditions = ", ".join(f"{c.value}={s}" for c, s in self._thresholds.items())
        return f"AmlRegistrar(authority={self._authority!r}, thresholds={{{conditions}}})"
