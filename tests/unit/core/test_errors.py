"""Unit tests for errors module."""

from aml_registrar.core.errors import (
    InvalidCategory,
    InvalidRiskScore,
    NotFoundError,
    ProtectedCategoryRemoval,
    RegistrarDecodeError,
    RegistrarError,
    RiskNotAccepted,
    get_status_code,
)


def test_registrar_error_base():
    error = RegistrarError("test message")
    assert error.message == "test message"
    assert error.details is None
    assert error.code == "AML_INTERNAL_ERROR"
    assert error.status_code == 500
    assert str(error) == "test message"


def test_invalid_risk_score():
    error = InvalidRiskScore("bad score", risk_score=11)
    assert error.code == "AML_RISK_SCORE_IS_INVALID"
    assert error.status_code == 400
    assert error.risk_score == 11
    assert error.details == {"risk_score": 11}


def test_invalid_category():
    error = InvalidCategory("unknown", category="Phishing")
    assert error.code == "AML_CATEGORY_IS_INVALID"
    assert error.status_code == 400
    assert error.details == {"category": "Phishing"}


def test_protected_category_removal():
    error = ProtectedCategoryRemoval("protected", category="All")
    assert error.code == "AML_PROTECTED_CATEGORY_REMOVAL"
    assert error.status_code == 409
    assert error.details == {"category": "All"}


def test_protected_category_removal_merges_details():
    error = ProtectedCategoryRemoval("protected", category="All", details={"owner": "x"})
    assert error.details == {"owner": "x", "category": "All"}


def test_risk_not_accepted():
    error = RiskNotAccepted("too risky", category="Mixer", risk_score=9, accepted_risk_score=2)
    assert error.code == "AML_NOT_ALLOWED"
    assert error.status_code == 403
    assert error.details == {"category": "Mixer", "risk_score": 9, "accepted_risk_score": 2}


def test_decode_error_with_details():
    error = RegistrarDecodeError("bad payload", details={"offset": 4})
    assert error.code == "AML_REGISTRAR_DECODE_FAILED"
    assert error.details == {"offset": 4}


def test_errors_share_base():
    for error in (
        InvalidRiskScore("x", risk_score=0),
        InvalidCategory("x", category="Phishing"),
        ProtectedCategoryRemoval("x", category="All"),
        RegistrarDecodeError("x"),
        NotFoundError("x"),
    ):
        assert isinstance(error, RegistrarError)


def test_get_status_code():
    assert get_status_code(InvalidRiskScore("test", risk_score=0)) == 400
    assert get_status_code(InvalidCategory("test", category="Phishing")) == 400
    assert get_status_code(ProtectedCategoryRemoval("test", category="All")) == 409
    assert get_status_code(RegistrarDecodeError("test")) == 400
    assert get_status_code(NotFoundError("test")) == 404
    assert get_status_code(RegistrarError("test")) == 500
