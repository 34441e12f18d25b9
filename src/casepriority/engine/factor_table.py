"""
casepriority Factor Table

Declarative list of every recognized risk factor. The scoring engine walks
this table in order; adding a factor type means adding a row here and a
weight key to the profile schema.

Each row names:
- key: factor name recorded in the audit trail
- predicate: when the factor applies to a CaseRiskFactors
- weight_key: PriorityWeights field holding its weight, or None when the
  factor carries its own points (external sub-scores)
- band: rows sharing a band are mutually exclusive; the first matching row
  in table order wins

Row order is the evaluation order and therefore the order of factors and
explanation lines: age band, time band, boolean flags, external sub-score.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from ..models import CaseRiskFactors, FactorSource, PriorityWeights


AGE_BAND = "age"
TIME_BAND = "time"


@dataclass(frozen=True)
class FactorRule:
    """One row of the factor table."""
    key: str
    description: str
    source: FactorSource
    predicate: Callable[[CaseRiskFactors], bool]
    weight_key: Optional[str] = None
    points: Optional[Callable[[CaseRiskFactors], int | float]] = None
    band: Optional[str] = None

    def applies(self, factors: CaseRiskFactors) -> bool:
        return bool(self.predicate(factors))

    def weight_for(self, factors: CaseRiskFactors, weights: PriorityWeights) -> int | float:
        if self.weight_key is not None:
            return weights.weight(self.weight_key)
        if self.points is not None:
            return self.points(factors)
        return 0


# =============================================================================
# Predicates
# =============================================================================

def _age_between(low: float, high: Optional[float]) -> Callable[[CaseRiskFactors], bool]:
    """Age in [low, high); high=None means no upper bound."""
    def predicate(f: CaseRiskFactors) -> bool:
        if f.age is None:
            return False
        return f.age >= low and (high is None or f.age < high)
    return predicate


def _missing_at_least(hours: int) -> Callable[[CaseRiskFactors], bool]:
    def predicate(f: CaseRiskFactors) -> bool:
        return f.hours_missing is not None and f.hours_missing >= hours
    return predicate


def _flag(name: str) -> Callable[[CaseRiskFactors], bool]:
    def predicate(f: CaseRiskFactors) -> bool:
        return getattr(f, name) is True
    return predicate


def _no_financial_resources(f: CaseRiskFactors) -> bool:
    # Only an explicit "no resources" answer counts; unknown is not a risk.
    return f.has_financial_resources is False


def _has_weather_points(f: CaseRiskFactors) -> bool:
    return f.weather_risk_points is not None


def weather_points(f: CaseRiskFactors) -> int | float:
    """External weather sub-score, floored at 0; integral values become ints."""
    value = max(0, f.weather_risk_points or 0)
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


# =============================================================================
# Factor Table
# =============================================================================

FACTOR_TABLE: tuple[FactorRule, ...] = (
    # Age band
    FactorRule(
        key="age_under_12",
        description="Child under 12 years old",
        source=FactorSource.AGE,
        predicate=_age_between(0, 12),
        weight_key="age_under_12",
        band=AGE_BAND,
    ),
    FactorRule(
        key="age_12_to_17",
        description="Minor aged 12-17",
        source=FactorSource.AGE,
        predicate=_age_between(12, 18),
        weight_key="age_12_to_17",
        band=AGE_BAND,
    ),
    FactorRule(
        key="age_over_65",
        description="Senior 65 years or older",
        source=FactorSource.AGE,
        predicate=_age_between(65, None),
        weight_key="age_over_65",
        band=AGE_BAND,
    ),
    # Time band, highest first
    FactorRule(
        key="missing_72_plus",
        description="Missing for 72+ hours",
        source=FactorSource.TIME,
        predicate=_missing_at_least(72),
        weight_key="missing_over_72_hours",
        band=TIME_BAND,
    ),
    FactorRule(
        key="missing_48_plus",
        description="Missing for 48+ hours",
        source=FactorSource.TIME,
        predicate=_missing_at_least(48),
        weight_key="missing_over_48_hours",
        band=TIME_BAND,
    ),
    FactorRule(
        key="missing_24_plus",
        description="Missing for 24+ hours",
        source=FactorSource.TIME,
        predicate=_missing_at_least(24),
        weight_key="missing_over_24_hours",
        band=TIME_BAND,
    ),
    # Medical
    FactorRule(
        key="medical_condition",
        description="Has medical condition requiring attention",
        source=FactorSource.MEDICAL,
        predicate=_flag("has_medical_condition"),
        weight_key="medical_dependency",
    ),
    FactorRule(
        key="medication_dependency",
        description="Requires daily medication",
        source=FactorSource.MEDICAL,
        predicate=_flag("requires_daily_medication"),
        weight_key="medical_dependency",
    ),
    # Mental health
    FactorRule(
        key="mental_health",
        description="Mental health condition",
        source=FactorSource.MENTAL_HEALTH,
        predicate=_flag("has_mental_health_condition"),
        weight_key="mental_health_condition",
    ),
    FactorRule(
        key="suicidal_risk",
        description="Risk of self-harm indicated",
        source=FactorSource.MENTAL_HEALTH,
        predicate=_flag("suicidal_risk"),
        weight_key="suicidal_risk",
    ),
    # Circumstances
    FactorRule(
        key="suspected_abduction",
        description="Suspected abduction or foul play",
        source=FactorSource.CIRCUMSTANCE,
        predicate=_flag("suspected_abduction"),
        weight_key="suspected_abduction",
    ),
    FactorRule(
        key="domestic_violence_history",
        description="History of domestic violence",
        source=FactorSource.CIRCUMSTANCE,
        predicate=_flag("domestic_violence_history"),
        weight_key="domestic_violence_history",
    ),
    FactorRule(
        key="out_of_character",
        description="Disappearance is out of character",
        source=FactorSource.CIRCUMSTANCE,
        predicate=_flag("out_of_character"),
        weight_key="out_of_character",
    ),
    FactorRule(
        key="no_resources",
        description="No known financial resources",
        source=FactorSource.CIRCUMSTANCE,
        predicate=_no_financial_resources,
        weight_key="no_financial_resources",
    ),
    # Environment
    FactorRule(
        key="adverse_weather",
        description="Adverse weather conditions",
        source=FactorSource.ENVIRONMENTAL,
        predicate=_flag("adverse_weather"),
        weight_key="adverse_weather",
    ),
    FactorRule(
        key="weather_risk_points",
        description="Weather exposure risk score",
        source=FactorSource.EXTERNAL,
        predicate=_has_weather_points,
        points=weather_points,
    ),
)


def factor_keys(table: tuple[FactorRule, ...] = FACTOR_TABLE) -> list[str]:
    return [rule.key for rule in table]
