"""AML policy schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

from aml_registrar.aml.category import Category
from aml_registrar.aml.registrar import MAX_RISK_LEVEL, AccountId, AmlRegistrar


class CategoryRiskSchema(BaseModel):
    """Accepted risk score for one category."""

    category: Category
    risk_score: int = Field(ge=1, le=MAX_RISK_LEVEL)


class PolicySchema(BaseModel):
    """Authority and thresholds of a registrar, in iteration order."""

    authority: str
    conditions: list[CategoryRiskSchema]

    @classmethod
    def from_registrar(cls, registrar: AmlRegistrar) -> PolicySchema:
        authority, conditions = registrar.get_policy()
        return cls(
            authority=authority,
            conditions=[
                CategoryRiskSchema(category=category, risk_score=risk_score)
                for category, risk_score in conditions
            ],
        )

    def to_registrar(self) -> AmlRegistrar:
        return AmlRegistrar.from_thresholds(
            AccountId(self.authority),
            ((item.category, item.risk_score) for item in self.conditions),
        )
