"""Response schemas for the API."""

from typing import Any, Optional, Union

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Liveness response."""
    status: str
    timestamp: str
    version: str
    profiles_loaded: int
    default_jurisdiction: str


class ErrorResponse(BaseModel):
    """Structured error response."""
    error: str
    code: str
    details: Optional[dict[str, Any]] = None
    request_id: str


# =============================================================================
# Assessment
# =============================================================================

class AppliedFactorResponse(BaseModel):
    """A weight that contributed to the score."""
    factor: str
    weight: Union[int, float]
    description: str
    source: str


class AssessmentResponse(BaseModel):
    """Result of a priority assessment."""
    score: Union[int, float]
    level: int
    level_label: str
    jurisdiction: str
    requested_jurisdiction: Optional[str] = None
    fallback_used: bool
    profile_version: str
    profile_hash: str
    factors: list[AppliedFactorResponse]
    explanation: list[str]


class EscalationResponse(BaseModel):
    """Outcome of an escalation check. Level fields are omitted when not escalating."""
    should_escalate: bool
    new_level: Optional[int] = None
    reason: Optional[str] = None
    hours_threshold: Optional[int] = None


# =============================================================================
# Display
# =============================================================================

class PriorityDisplayResponse(BaseModel):
    """Display metadata for a priority level."""
    level: int
    label: str
    label_fr: str
    color: str
    bg_color: str
    description: str
    description_fr: str


# =============================================================================
# Jurisdictions
# =============================================================================

class JurisdictionSummary(BaseModel):
    """Jurisdiction profile listing entry."""
    id: str
    name: str
    region: str
    country: str
    language: str
    version: str
    is_fallback: bool = False


class JurisdictionDetail(BaseModel):
    """Resolved jurisdiction profile."""
    requested_id: str
    fallback_used: bool
    profile_hash: str
    profile: dict[str, Any]


class JurisdictionSelection(BaseModel):
    """Profile chosen from a location or address."""
    jurisdiction_id: str
    name: str
    fallback_used: bool


class ProfileValidationResponse(BaseModel):
    """Result of validating a candidate profile document."""
    valid: bool
    errors: list[str]
