"""
casepriority Auto-Escalation

Time-driven promotion of unresolved cases. A case that stays unresolved
past the threshold for its current level is promoted exactly one level.

    MINIMAL (4) -> LOW (3)      after 48 hours
    LOW (3)     -> MEDIUM (2)   after 72 hours
    MEDIUM (2)  -> HIGH (1)     after 5 days (120 hours)
    HIGH (1)    -> CRITICAL (0) after 7 days (168 hours)

CRITICAL never auto-escalates. Each check is independent: the caller owns
the case's current level and re-runs the check from the new level, so a
long-missing case climbs one step per check.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Optional

from ..models import EscalationDecision, PriorityLevel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EscalationStep:
    """One rung of the escalation ladder."""
    from_level: PriorityLevel
    to_level: PriorityLevel
    threshold_hours: int
    elapsed_label: str

    def reason(self) -> str:
        return (
            f"Auto-escalated from {self.from_level.label} to {self.to_level.label} "
            f"after {self.elapsed_label}"
        )


ESCALATION_STEPS: tuple[EscalationStep, ...] = (
    EscalationStep(PriorityLevel.MINIMAL, PriorityLevel.LOW, 48, "48 hours"),
    EscalationStep(PriorityLevel.LOW, PriorityLevel.MEDIUM, 72, "72 hours"),
    EscalationStep(PriorityLevel.MEDIUM, PriorityLevel.HIGH, 120, "5 days (120 hours)"),
    EscalationStep(PriorityLevel.HIGH, PriorityLevel.CRITICAL, 168, "7 days (168 hours)"),
)

_STEPS_BY_LEVEL = {step.from_level: step for step in ESCALATION_STEPS}


def next_escalation(level: Any) -> Optional[EscalationStep]:
    """The step that applies from ``level``, or None (CRITICAL or invalid)."""
    coerced = PriorityLevel.coerce(level)
    if coerced is None:
        return None
    return _STEPS_BY_LEVEL.get(coerced)


def _as_hours(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def check_auto_escalation(current_level: Any, hours_missing: Any) -> EscalationDecision:
    """
    Decide whether a case should be promoted one level.

    Never raises: an invalid level or non-numeric hours yields
    should_escalate=False.
    """
    step = next_escalation(current_level)
    hours = _as_hours(hours_missing)
    if step is None or hours is None or hours < step.threshold_hours:
        return EscalationDecision(should_escalate=False)

    logger.info(
        "Escalating case from %s to %s at %s hours",
        step.from_level.label,
        step.to_level.label,
        hours,
    )
    return EscalationDecision(
        should_escalate=True,
        new_level=step.to_level,
        reason=step.reason(),
        hours_threshold=step.threshold_hours,
    )
