"""Prometheus metrics for the AML registrar."""

from prometheus_client import Counter, Histogram

# ---------------------------------------------------------------------------
# Registrar mutations
# ---------------------------------------------------------------------------

aml_registrar_mutations_total = Counter(
    "aml_registrar_mutations_total",
    "Total registrar mutations",
    ["operation", "status"],  # set_authority | update_category | remove_category
)

# ---------------------------------------------------------------------------
# Risk evaluation
# ---------------------------------------------------------------------------

aml_registrar_risk_checks_total = Counter(
    "aml_registrar_risk_checks_total",
    "Total risk checks against registrar thresholds",
    ["category", "outcome"],  # accepted | rejected
)

# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------

aml_registrar_store_latency_seconds = Histogram(
    "aml_registrar_store_latency_seconds",
    "Registrar store operation latency in seconds",
    ["operation"],  # save | load | delete | version
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0],
)
