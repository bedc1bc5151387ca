"""Unit tests for metrics module."""

import pytest
from prometheus_client import REGISTRY

from aml_registrar.aml.category import Category
from aml_registrar.aml.evaluation import is_risk_accepted
from aml_registrar.core import metrics
from aml_registrar.core.errors import InvalidRiskScore


def test_metrics_are_defined():
    assert hasattr(metrics, "aml_registrar_mutations_total")
    assert hasattr(metrics, "aml_registrar_risk_checks_total")
    assert hasattr(metrics, "aml_registrar_store_latency_seconds")


def test_metrics_have_labels():
    assert hasattr(metrics.aml_registrar_mutations_total, "labels")
    assert hasattr(metrics.aml_registrar_risk_checks_total, "labels")
    assert hasattr(metrics.aml_registrar_store_latency_seconds, "labels")


def _sample(name: str, labels: dict[str, str]) -> float:
    return REGISTRY.get_sample_value(name, labels) or 0.0


def test_update_category_counts_success_and_rejection(registrar):
    labels_ok = {"operation": "update_category", "status": "success"}
    labels_rejected = {"operation": "update_category", "status": "rejected"}
    before_ok = _sample("aml_registrar_mutations_total", labels_ok)
    before_rejected = _sample("aml_registrar_mutations_total", labels_rejected)

    registrar.update_category(Category.SCAM, 6)
    with pytest.raises(InvalidRiskScore):
        registrar.update_category(Category.SCAM, 0)

    assert _sample("aml_registrar_mutations_total", labels_ok) == before_ok + 1
    assert _sample("aml_registrar_mutations_total", labels_rejected) == before_rejected + 1


def test_risk_check_counts_outcome(registrar):
    labels = {"category": "Theft", "outcome": "rejected"}
    before = _sample("aml_registrar_risk_checks_total", labels)

    is_risk_accepted(registrar.get_thresholds(), Category.THEFT, 9)

    assert _sample("aml_registrar_risk_checks_total", labels) == before + 1
