"""
casepriority Exception Hierarchy

Domain-specific exceptions for jurisdiction profiles and priority display.
Every exception carries a stable CPR_* code that API clients can match on.

Scoring and escalation never raise for malformed case input; these
exceptions cover profile loading, registry construction and presentation.

Exception codes follow the pattern: CPR_<CATEGORY>_<SPECIFIC>
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class CasePriorityError(Exception):
    """
    Base exception for all casepriority errors.

    Attributes:
        message: What went wrong, for people
        code: Machine-readable error code (CPR_*)
        details: Structured context (paths, field errors, IDs)
        jurisdiction_id: Associated jurisdiction profile ID if applicable
    """
    message: str
    code: str = "CPR_INTERNAL_ERROR"
    details: dict[str, Any] = field(default_factory=dict)
    jurisdiction_id: Optional[str] = None

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        parts = [f"[{self.code}] {self.message}"]
        if self.jurisdiction_id:
            parts.append(f"(jurisdiction: {self.jurisdiction_id})")
        return " ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict form used in log records and API error bodies."""
        result: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.jurisdiction_id:
            result["jurisdiction_id"] = self.jurisdiction_id
        return result


# =============================================================================
# Profile Errors
# =============================================================================

@dataclass
class ProfileLoadError(CasePriorityError):
    """Failed to read or parse a jurisdiction profile document."""
    code: str = "CPR_PROFILE_LOAD_ERROR"


@dataclass
class ProfileValidationError(CasePriorityError):
    """Jurisdiction profile failed schema validation."""
    code: str = "CPR_PROFILE_VALIDATION_ERROR"

    @property
    def errors(self) -> list[str]:
        return list(self.details.get("errors", []))


@dataclass
class ProfileVersionMismatch(CasePriorityError):
    """Profile schema version is incompatible with this engine."""
    code: str = "CPR_PROFILE_VERSION_MISMATCH"


# =============================================================================
# Registry Errors
# =============================================================================

@dataclass
class DuplicateProfileError(CasePriorityError):
    """Two profiles with the same ID were supplied to one registry."""
    code: str = "CPR_DUPLICATE_PROFILE"


@dataclass
class FallbackProfileMissingError(CasePriorityError):
    """Registry was built without its fallback (generic) profile."""
    code: str = "CPR_FALLBACK_PROFILE_MISSING"


# =============================================================================
# Priority Level Errors
# =============================================================================

@dataclass
class InvalidPriorityLevelError(CasePriorityError):
    """Priority level is outside the 0..4 range."""
    code: str = "CPR_INVALID_PRIORITY_LEVEL"
