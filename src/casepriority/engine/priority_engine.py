"""
casepriority Priority Engine

Scores a case's risk factors against a jurisdiction profile and maps the
score to a priority level.

Key properties:
- Deterministic: same factors and same profile give the same result
- Total: malformed input degrades to "factor absent", never raises
- Explainable: every point in the score is traceable to an AppliedFactor
  and an explanation line
- Unknown jurisdiction IDs are scored with the fallback profile and the
  result is flagged with fallback_used

Usage:
    engine = PriorityEngine()
    result = engine.assess({"age": 8, "hoursMissing": 30}, "qc_spvm_v1")
    print(result.level, result.score)
    for line in result.explanation:
        print(line)
"""
from __future__ import annotations

import logging
from typing import Any, Optional

from ..canon import profile_fingerprint
from ..config import load_settings
from ..models import (
    AppliedFactor,
    AssessmentResult,
    CaseRiskFactors,
    PriorityLevel,
    PriorityThresholds,
    PriorityWeights,
)
from ..profiles.registry import ProfileRegistry, ProfileResolution, get_default_registry
from .display import get_priority_display
from .factor_table import FACTOR_TABLE, FactorRule

logger = logging.getLogger(__name__)


# =============================================================================
# Scoring Primitives
# =============================================================================

def level_for_score(score: int | float, thresholds: PriorityThresholds) -> PriorityLevel:
    """Map a score to a level; thresholds are inclusive lower bounds."""
    if score >= thresholds.priority0:
        return PriorityLevel.CRITICAL
    if score >= thresholds.priority1:
        return PriorityLevel.HIGH
    if score >= thresholds.priority2:
        return PriorityLevel.MEDIUM
    if score >= thresholds.priority3:
        return PriorityLevel.LOW
    return PriorityLevel.MINIMAL


def evaluate_factors(
    factors: CaseRiskFactors,
    weights: PriorityWeights,
    table: tuple[FactorRule, ...] = FACTOR_TABLE,
) -> list[AppliedFactor]:
    """
    Walk the factor table and return every factor that applies.

    At most one row per band is applied (the first matching row).
    """
    applied: list[AppliedFactor] = []
    filled_bands: set[str] = set()

    for rule in table:
        if rule.band is not None and rule.band in filled_bands:
            continue
        if not rule.applies(factors):
            continue

        applied.append(AppliedFactor(
            factor=rule.key,
            weight=rule.weight_for(factors, weights),
            description=rule.description,
            source=rule.source,
        ))
        if rule.band is not None:
            filled_bands.add(rule.band)

    return applied


def build_explanation(level: PriorityLevel, applied: list[AppliedFactor]) -> list[str]:
    """One level line, then one line per applied factor in evaluation order."""
    display = get_priority_display(level)
    lines = [f"Priority Level: {int(level)} - {display.label} / {display.label_fr}"]
    lines.extend(f"• {f.description} (+{f.weight} points)" for f in applied)
    return lines


# =============================================================================
# Priority Engine
# =============================================================================

class PriorityEngine:
    """
    Priority assessment against a profile registry.

    Holds no per-assessment state; one engine can serve concurrent callers.
    """

    def __init__(
        self,
        registry: Optional[ProfileRegistry] = None,
        default_jurisdiction: Optional[str] = None,
        table: tuple[FactorRule, ...] = FACTOR_TABLE,
    ):
        """
        Args:
            registry: Profiles to score against (default: process-wide registry)
            default_jurisdiction: Profile used when assess() gets no ID
                (default: CASEPRIORITY_DEFAULT_JURISDICTION)
            table: Factor table to evaluate
        """
        self._registry = registry
        self._default_jurisdiction = (
            default_jurisdiction or load_settings().default_jurisdiction
        )
        self._table = table

    @property
    def registry(self) -> ProfileRegistry:
        if self._registry is None:
            self._registry = get_default_registry()
        return self._registry

    @property
    def default_jurisdiction(self) -> str:
        return self._default_jurisdiction

    def assess(self, factors: Any, jurisdiction_id: Optional[str] = None) -> AssessmentResult:
        """
        Compute score, level and explanation for one case.

        Args:
            factors: CaseRiskFactors or an intake mapping (snake or camel keys)
            jurisdiction_id: Profile ID; None uses the default jurisdiction

        Returns:
            AssessmentResult
        """
        case_factors = CaseRiskFactors.from_mapping(factors)

        resolution = self._resolve(jurisdiction_id)
        profile = resolution.profile
        weights = profile.priority_weights

        applied = evaluate_factors(case_factors, weights, self._table)
        score = sum(f.weight for f in applied)
        level = level_for_score(score, weights.thresholds)

        result = AssessmentResult(
            score=score,
            level=level,
            jurisdiction=profile.id,
            factors=tuple(applied),
            explanation=tuple(build_explanation(level, applied)),
            requested_jurisdiction=jurisdiction_id if isinstance(jurisdiction_id, str) else None,
            fallback_used=resolution.fallback_used,
            profile_version=profile.version,
            profile_hash=profile_fingerprint(profile),
        )

        logger.debug(
            "Assessed case: jurisdiction=%s score=%s level=%s factors=%s",
            profile.id,
            score,
            level.label,
            result.factor_names(),
        )
        return result

    def _resolve(self, jurisdiction_id: Optional[str]) -> ProfileResolution:
        if jurisdiction_id is not None:
            return self.registry.resolve_with_status(jurisdiction_id)

        # Omitted ID: the default profile, or the registry's fallback when the
        # default is not registered. Neither case is a caller-visible fallback.
        profile = self.registry.get(self._default_jurisdiction)
        if profile is None:
            logger.debug(
                "Default jurisdiction '%s' not registered; using '%s'",
                self._default_jurisdiction,
                self.registry.fallback_id,
            )
            profile = self.registry.fallback
        return ProfileResolution(profile=profile, requested_id=None)


def assess_priority(
    factors: Any,
    jurisdiction_id: Optional[str] = None,
    registry: Optional[ProfileRegistry] = None,
) -> AssessmentResult:
    """Convenience wrapper: assess one case with a throwaway PriorityEngine."""
    return PriorityEngine(registry=registry).assess(factors, jurisdiction_id)
