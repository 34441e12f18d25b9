"""
casepriority Models

Frozen dataclasses for jurisdiction profiles, assessment inputs and outputs.
"""
from __future__ import annotations

from .enums import FactorSource, PriorityLevel, ProfileLanguage
from .profile import (
    BoundingBox,
    Contacts,
    Integrations,
    JurisdictionProfile,
    LegalRequirements,
    PriorityThresholds,
    PriorityWeights,
    ServiceArea,
)
from .assessment import (
    AppliedFactor,
    AssessmentResult,
    CaseRiskFactors,
    EscalationDecision,
    PriorityDisplay,
)

__all__ = [
    # Enums
    "FactorSource",
    "PriorityLevel",
    "ProfileLanguage",
    # Profile
    "BoundingBox",
    "Contacts",
    "Integrations",
    "JurisdictionProfile",
    "LegalRequirements",
    "PriorityThresholds",
    "PriorityWeights",
    "ServiceArea",
    # Assessment
    "AppliedFactor",
    "AssessmentResult",
    "CaseRiskFactors",
    "EscalationDecision",
    "PriorityDisplay",
]
