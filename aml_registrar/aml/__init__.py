"""AML risk policy: categories, the registrar and its storage form."""

from aml_registrar.aml.category import Category
from aml_registrar.aml.codec import (
    decode_registrar,
    decode_registrar_b64,
    encode_registrar,
    encode_registrar_b64,
)
from aml_registrar.aml.evaluation import accepted_risk_for, assert_risk_accepted, is_risk_accepted
from aml_registrar.aml.registrar import (
    MAX_RISK_LEVEL,
    AccountId,
    AmlRegistrar,
    CategoryRisk,
    RiskScore,
    validate_risk_score,
)

__all__ = [
    "MAX_RISK_LEVEL",
    "AccountId",
    "AmlRegistrar",
    "Category",
    "CategoryRisk",
    "RiskScore",
    "accepted_risk_for",
    "assert_risk_accepted",
    "decode_registrar",
    "decode_registrar_b64",
    "encode_registrar",
    "encode_registrar_b64",
    "is_risk_accepted",
    "validate_risk_score",
]
