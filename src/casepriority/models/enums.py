"""
casepriority Enumerations

Priority levels are an IntEnum because the level number itself is part of
the public contract (0 = most urgent). The remaining enums inherit from
(str, Enum) for JSON serialization compatibility.
"""
from __future__ import annotations

from enum import Enum, IntEnum


# =============================================================================
# Priority Level
# =============================================================================

class PriorityLevel(IntEnum):
    """Discrete urgency tier, P0 (most urgent) through P4."""
    CRITICAL = 0
    HIGH = 1
    MEDIUM = 2
    LOW = 3
    MINIMAL = 4

    @property
    def label(self) -> str:
        return self.name

    @classmethod
    def coerce(cls, value: object) -> "PriorityLevel | None":
        """Return the matching level, or None for anything outside 0..4."""
        if isinstance(value, bool) or not isinstance(value, int):
            return None
        try:
            return cls(value)
        except ValueError:
            return None


# =============================================================================
# Profile Language
# =============================================================================

class ProfileLanguage(str, Enum):
    """Operating language(s) of a jurisdiction."""
    EN = "en"
    FR = "fr"
    BOTH = "both"


# =============================================================================
# Factor Sources
# =============================================================================

class FactorSource(str, Enum):
    """Which part of the intake assessment a factor comes from."""
    AGE = "age_assessment"
    TIME = "time_assessment"
    MEDICAL = "medical_assessment"
    MENTAL_HEALTH = "mental_health_assessment"
    CIRCUMSTANCE = "circumstance_assessment"
    ENVIRONMENTAL = "environmental_assessment"
    EXTERNAL = "external_subscore"
