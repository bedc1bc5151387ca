"""Shared domain constants."""

from __future__ import annotations

# Highest risk level an AML authority reports; thresholds live in 1..MAX_RISK_LEVEL.
MAX_RISK_LEVEL: int = 10
DEFAULT_ACCEPTED_RISK_SCORE: int = MAX_RISK_LEVEL // 2
