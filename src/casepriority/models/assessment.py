"""
casepriority Assessment Models

Inputs and outputs of the scoring engine and the escalation clock:
- CaseRiskFactors: transient per-assessment input
- AppliedFactor: one weight that contributed to a score (audit trail)
- AssessmentResult: score, level and explanation
- EscalationDecision: outcome of one escalation check
- PriorityDisplay: presentation metadata for a level

None of these are persisted here; the case workflow owns persistence.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .enums import FactorSource, PriorityLevel


# =============================================================================
# Input coercion
# =============================================================================

def _as_number(value: Any) -> Optional[float | int]:
    """Non-negative finite number, or None ("factor absent")."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if value < 0:
        return None
    return value


def _as_flag(value: Any) -> Optional[bool]:
    return value if isinstance(value, bool) else None


def _lookup(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return None


# Input mapping keys accepted for each field (snake_case first, then the
# camelCase spelling used by intake forms).
_FLAG_KEYS: dict[str, tuple[str, ...]] = {
    "has_medical_condition": ("has_medical_condition", "hasMedicalCondition"),
    "requires_daily_medication": ("requires_daily_medication", "requiresDailyMedication"),
    "has_mental_health_condition": ("has_mental_health_condition", "hasMentalHealthCondition"),
    "suicidal_risk": ("suicidal_risk", "suicidalRisk"),
    "suspected_abduction": ("suspected_abduction", "suspectedAbduction"),
    "domestic_violence_history": ("domestic_violence_history", "domesticViolenceHistory"),
    "out_of_character": ("out_of_character", "outOfCharacter"),
    "has_financial_resources": ("has_financial_resources", "hasFinancialResources"),
    "adverse_weather": ("adverse_weather", "adverseWeather"),
}

# hourssMissing is a legacy intake spelling; it is read only when the
# correctly spelled key is absent and is never written back out.
_HOURS_KEYS = ("hours_missing", "hoursMissing", "hourssMissing")


# =============================================================================
# Case Risk Factors
# =============================================================================

@dataclass(frozen=True)
class CaseRiskFactors:
    """
    Risk factors for one assessment.

    Every field is optional. None means "unknown", which scores as
    "factor absent". has_financial_resources is the one inverted flag:
    only an explicit False is a risk condition.
    """
    age: Optional[float] = None
    hours_missing: Optional[float] = None
    has_medical_condition: Optional[bool] = None
    requires_daily_medication: Optional[bool] = None
    has_mental_health_condition: Optional[bool] = None
    suicidal_risk: Optional[bool] = None
    suspected_abduction: Optional[bool] = None
    domestic_violence_history: Optional[bool] = None
    out_of_character: Optional[bool] = None
    has_financial_resources: Optional[bool] = None
    adverse_weather: Optional[bool] = None
    weather_risk_points: Optional[float] = None

    @classmethod
    def from_mapping(cls, data: Any) -> "CaseRiskFactors":
        """
        Build factors from an intake mapping.

        Accepts snake_case and camelCase keys, plus the legacy
        ``hourssMissing`` spelling. Never raises: anything that is not a
        mapping yields empty factors, and malformed values become None.
        """
        if isinstance(data, CaseRiskFactors):
            return data
        if not isinstance(data, Mapping):
            return cls()

        flags = {
            name: _as_flag(_lookup(data, *keys))
            for name, keys in _FLAG_KEYS.items()
        }

        weather = _lookup(data, "weather_risk_points", "weatherRiskPoints")
        if isinstance(weather, bool) or not isinstance(weather, (int, float)):
            weather = None
        elif isinstance(weather, float) and not math.isfinite(weather):
            weather = None

        return cls(
            age=_as_number(_lookup(data, "age")),
            hours_missing=_as_number(_lookup(data, *_HOURS_KEYS)),
            weather_risk_points=weather,
            **flags,
        )


# =============================================================================
# Assessment Output
# =============================================================================

@dataclass(frozen=True)
class AppliedFactor:
    """A single weight applied to the score."""
    factor: str
    weight: int | float
    description: str
    source: FactorSource

    def to_dict(self) -> dict[str, Any]:
        return {
            "factor": self.factor,
            "weight": self.weight,
            "description": self.description,
            "source": self.source.value,
        }


@dataclass(frozen=True)
class AssessmentResult:
    """
    Output of a priority assessment.

    Attributes:
        score: Sum of the weights in ``factors``
        level: Priority level derived from the profile thresholds
        jurisdiction: ID of the profile actually used
        factors: Applied weights, in evaluation order
        explanation: Human-readable lines; the first states the level
        requested_jurisdiction: ID the caller asked for (None if omitted)
        fallback_used: True if an unknown ID was demoted to the generic profile
        profile_version: Version of the profile used
        profile_hash: Short content hash of the profile weight table
    """
    score: int | float
    level: PriorityLevel
    jurisdiction: str
    factors: tuple[AppliedFactor, ...] = ()
    explanation: tuple[str, ...] = ()
    requested_jurisdiction: Optional[str] = None
    fallback_used: bool = False
    profile_version: str = ""
    profile_hash: str = ""

    def factor_names(self) -> list[str]:
        return [f.factor for f in self.factors]

    def get_factor(self, name: str) -> Optional[AppliedFactor]:
        for f in self.factors:
            if f.factor == name:
                return f
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "level": int(self.level),
            "level_label": self.level.label,
            "jurisdiction": self.jurisdiction,
            "requested_jurisdiction": self.requested_jurisdiction,
            "fallback_used": self.fallback_used,
            "profile_version": self.profile_version,
            "profile_hash": self.profile_hash,
            "factors": [f.to_dict() for f in self.factors],
            "explanation": list(self.explanation),
        }


# =============================================================================
# Escalation Output
# =============================================================================

@dataclass(frozen=True)
class EscalationDecision:
    """Outcome of one auto-escalation check."""
    should_escalate: bool
    new_level: Optional[PriorityLevel] = None
    reason: Optional[str] = None
    hours_threshold: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"should_escalate": self.should_escalate}
        if self.should_escalate:
            result["new_level"] = int(self.new_level)
            result["reason"] = self.reason
            result["hours_threshold"] = self.hours_threshold
        return result


# =============================================================================
# Display Metadata
# =============================================================================

@dataclass(frozen=True)
class PriorityDisplay:
    """Bilingual label, colors and description for one priority level."""
    level: PriorityLevel
    label: str
    label_fr: str
    color: str
    bg_color: str
    description: str
    description_fr: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "level": int(self.level),
            "label": self.label,
            "label_fr": self.label_fr,
            "color": self.color,
            "bg_color": self.bg_color,
            "description": self.description,
            "description_fr": self.description_fr,
        }
