"""
casepriority Engine

Priority scoring, auto-escalation and display resolution.
"""
from __future__ import annotations

from .display import get_priority_display, list_priority_displays
from .escalation import (
    ESCALATION_STEPS,
    EscalationStep,
    check_auto_escalation,
    next_escalation,
)
from .factor_table import AGE_BAND, FACTOR_TABLE, TIME_BAND, FactorRule, factor_keys
from .priority_engine import (
    PriorityEngine,
    assess_priority,
    build_explanation,
    evaluate_factors,
    level_for_score,
)

__all__ = [
    # Scoring
    "PriorityEngine",
    "assess_priority",
    "build_explanation",
    "evaluate_factors",
    "level_for_score",
    # Factor table
    "AGE_BAND",
    "TIME_BAND",
    "FACTOR_TABLE",
    "FactorRule",
    "factor_keys",
    # Escalation
    "ESCALATION_STEPS",
    "EscalationStep",
    "check_auto_escalation",
    "next_escalation",
    # Display
    "get_priority_display",
    "list_priority_displays",
]
