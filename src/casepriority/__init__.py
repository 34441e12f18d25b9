"""
casepriority - Missing-Persons Case Priority Engine

casepriority turns the risk factors captured at intake into a priority
level (P0 critical through P4 minimal) using jurisdiction-specific weights,
and promotes unresolved cases as time passes.

Core Principle: every point in a score is traceable to a named factor and a
versioned jurisdiction profile.

Key Features:
- Jurisdiction profiles as versioned YAML/JSON data, validated on load
- Deterministic, explainable scoring (bilingual level line + one line per factor)
- Unknown jurisdictions fall back to a generic profile, flagged in the result
- Time-based auto-escalation, one level per check
- Bilingual display metadata for dashboards

Quick Start:
    from casepriority import assess_priority, check_auto_escalation

    result = assess_priority({"age": 8, "hoursMissing": 30}, "qc_spvm_v1")
    print(result.level.label, result.score)

    decision = check_auto_escalation(result.level, hours_missing=50)
    if decision.should_escalate:
        print(decision.reason)

Version: 0.1.0
"""
from __future__ import annotations

__version__ = "0.1.0"

# =============================================================================
# Core Models (Re-exported for convenience)
# =============================================================================
from .models import (
    AppliedFactor,
    AssessmentResult,
    CaseRiskFactors,
    EscalationDecision,
    FactorSource,
    JurisdictionProfile,
    PriorityDisplay,
    PriorityLevel,
    PriorityThresholds,
    PriorityWeights,
    ProfileLanguage,
)

# =============================================================================
# Exceptions
# =============================================================================
from .exceptions import (
    CasePriorityError,
    DuplicateProfileError,
    FallbackProfileMissingError,
    InvalidPriorityLevelError,
    ProfileLoadError,
    ProfileValidationError,
    ProfileVersionMismatch,
)

# =============================================================================
# Profiles
# =============================================================================
from .profiles import (
    ProfileLoader,
    ProfileRegistry,
    get_default_registry,
    resolve_profile,
    select_by_address,
    select_by_location,
    validate_profile,
)

# =============================================================================
# Engine
# =============================================================================
from .engine import (
    PriorityEngine,
    assess_priority,
    check_auto_escalation,
    get_priority_display,
    level_for_score,
    list_priority_displays,
    next_escalation,
)

__all__ = [
    "__version__",
    # Models
    "AppliedFactor",
    "AssessmentResult",
    "CaseRiskFactors",
    "EscalationDecision",
    "FactorSource",
    "JurisdictionProfile",
    "PriorityDisplay",
    "PriorityLevel",
    "PriorityThresholds",
    "PriorityWeights",
    "ProfileLanguage",
    # Exceptions
    "CasePriorityError",
    "DuplicateProfileError",
    "FallbackProfileMissingError",
    "InvalidPriorityLevelError",
    "ProfileLoadError",
    "ProfileValidationError",
    "ProfileVersionMismatch",
    # Profiles
    "ProfileLoader",
    "ProfileRegistry",
    "get_default_registry",
    "resolve_profile",
    "select_by_address",
    "select_by_location",
    "validate_profile",
    # Engine
    "PriorityEngine",
    "assess_priority",
    "check_auto_escalation",
    "get_priority_display",
    "level_for_score",
    "list_priority_displays",
    "next_escalation",
]
