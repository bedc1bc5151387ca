"""AML registrar error hierarchy."""

from typing import Any


class RegistrarError(Exception):
    """Base exception for AML registrar errors."""

    code = "AML_INTERNAL_ERROR"
    status_code = 500

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.details = details
        super().__init__(message)


class InvalidRiskScore(RegistrarError):
    """Risk score is 0 or above MAX_RISK_LEVEL."""

    code = "AML_RISK_SCORE_IS_INVALID"
    status_code = 400

    def __init__(
        self,
        message: str,
        risk_score: Any,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details={**(details or {}), "risk_score": risk_score})
        self.risk_score = risk_score


class ProtectedCategoryRemoval(RegistrarError):
    """Attempt to remove the wildcard category.

    The `All` threshold is the default policy and has to stay configured for
    as long as the registrar exists. It can be overwritten, never removed.
    """

    code = "AML_PROTECTED_CATEGORY_REMOVAL"
    status_code = 409

    def __init__(
        self,
        message: str,
        category: str,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details={**(details or {}), "category": category})
        self.category = category


class InvalidCategory(RegistrarError):
    """Category name is not one of the known AML categories."""

    code = "AML_CATEGORY_IS_INVALID"
    status_code = 400

    def __init__(
        self,
        message: str,
        category: Any,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details={**(details or {}), "category": category})
        self.category = category


class RegistrarDecodeError(RegistrarError):
    """Stored registrar payload is malformed."""

    code = "AML_REGISTRAR_DECODE_FAILED"
    status_code = 400


class RiskNotAccepted(RegistrarError):
    """Reported risk score exceeds the accepted threshold."""

    code = "AML_NOT_ALLOWED"
    status_code = 403

    def __init__(
        self,
        message: str,
        category: str,
        risk_score: int,
        accepted_risk_score: int,
        details: dict[str, Any] | None = None,
    ):
        base_details = {
            "category": category,
            "risk_score": risk_score,
            "accepted_risk_score": accepted_risk_score,
        }
        super().__init__(message, details={**base_details, **(details or {})})
        self.category = category
        self.risk_score = risk_score
        self.accepted_risk_score = accepted_risk_score


class NotFoundError(RegistrarError):
    """Registrar or threshold not found."""

    code = "AML_NOT_FOUND"
    status_code = 404


ERROR_STATUS_MAP: dict[type[RegistrarError], int] = {
    InvalidRiskScore: 400,
    InvalidCategory: 400,
    ProtectedCategoryRemoval: 409,
    RegistrarDecodeError: 400,
    RiskNotAccepted: 403,
    NotFoundError: 404,
}


def get_status_code(error: RegistrarError) -> int:
    """Get HTTP status code for error."""
    return ERROR_STATUS_MAP.get(type(error), 500)
