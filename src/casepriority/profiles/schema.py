"""
casepriority Jurisdiction Profile Schemas

Pydantic models for validating jurisdiction profile YAML/JSON documents.

Documents may use the camelCase keys written by the intake dashboards
(priorityWeights, ageUnder12, missingOver72Hours, ...) or the snake_case
field names. Unknown keys are rejected.

Schema versioning:
- schema_version field tracks breaking changes
- Loaders check major version compatibility
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Mapping, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictInt,
    ValidationError,
    model_validator,
)


# =============================================================================
# Schema Version
# =============================================================================

SCHEMA_VERSION = "1.0.0"

PROFILE_ID_PATTERN = r"^[a-z0-9_]+$"

LanguageValue = Literal["en", "fr", "both"]

# Top-level keys every profile must carry: (camelCase, snake_case)
REQUIRED_FIELDS: tuple[tuple[str, str], ...] = (
    ("id", "id"),
    ("name", "name"),
    ("region", "region"),
    ("country", "country"),
    ("language", "language"),
    ("priorityWeights", "priority_weights"),
    ("integrations", "integrations"),
    ("legalRequirements", "legal_requirements"),
    ("contacts", "contacts"),
)


class _ProfileModel(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)


# =============================================================================
# Scoring Schemas
# =============================================================================

class ThresholdsSchema(_ProfileModel):
    """Minimum score per level; must be strictly ascending P3 < P2 < P1 < P0."""
    priority0: StrictInt = Field(..., ge=0)
    priority1: StrictInt = Field(..., ge=0)
    priority2: StrictInt = Field(..., ge=0)
    priority3: StrictInt = Field(..., ge=0)

    @model_validator(mode="after")
    def validate_ascending(self) -> "ThresholdsSchema":
        if not (self.priority3 < self.priority2 < self.priority1 < self.priority0):
            raise ValueError(
                "thresholds must be strictly ascending: "
                "priority3 < priority2 < priority1 < priority0"
            )
        return self


class PriorityWeightsSchema(_ProfileModel):
    """Weight table: one integer (0..100) per recognized risk factor."""
    age_under_12: StrictInt = Field(..., ge=0, le=100, alias="ageUnder12")
    age_12_to_17: StrictInt = Field(..., ge=0, le=100, alias="age12to17")
    age_over_65: StrictInt = Field(..., ge=0, le=100, alias="ageOver65")
    mental_health_condition: StrictInt = Field(..., ge=0, le=100, alias="mentalHealthCondition")
    medical_dependency: StrictInt = Field(..., ge=0, le=100, alias="medicalDependency")
    suicidal_risk: StrictInt = Field(..., ge=0, le=100, alias="suicidalRisk")
    suspected_abduction: StrictInt = Field(..., ge=0, le=100, alias="suspectedAbduction")
    domestic_violence_history: StrictInt = Field(..., ge=0, le=100, alias="domesticViolenceHistory")
    out_of_character: StrictInt = Field(..., ge=0, le=100, alias="outOfCharacter")
    no_financial_resources: StrictInt = Field(..., ge=0, le=100, alias="noFinancialResources")
    adverse_weather: StrictInt = Field(..., ge=0, le=100, alias="adverseWeather")
    missing_over_24_hours: StrictInt = Field(..., ge=0, le=100, alias="missingOver24Hours")
    missing_over_48_hours: StrictInt = Field(..., ge=0, le=100, alias="missingOver48Hours")
    missing_over_72_hours: StrictInt = Field(..., ge=0, le=100, alias="missingOver72Hours")
    thresholds: ThresholdsSchema


# =============================================================================
# Metadata Schemas
# =============================================================================

class IntegrationsSchema(_ProfileModel):
    hospital_registry: StrictBool = Field(..., alias="hospitalRegistry")
    morgue_registry: StrictBool = Field(..., alias="morgueRegistry")
    border_services: StrictBool = Field(..., alias="borderServices")
    detention_facilities: StrictBool = Field(..., alias="detentionFacilities")
    social_services: StrictBool = Field(..., alias="socialServices")
    transit_authority: StrictBool = Field(..., alias="transitAuthority")


class LegalRequirementsSchema(_ProfileModel):
    waiting_period_hours: StrictInt = Field(..., ge=0, alias="waitingPeriodHours")
    parental_consent_required: StrictBool = Field(..., alias="parentalConsentRequired")
    data_retention_days: StrictInt = Field(..., ge=1, alias="dataRetentionDays")
    privacy_law_reference: str = Field(..., alias="privacyLawReference")
    mandatory_reporting: list[str] = Field(..., alias="mandatoryReporting")


class ContactsSchema(_ProfileModel):
    emergency_line: str = Field(..., alias="emergencyLine")
    non_emergency_line: str = Field(..., alias="nonEmergencyLine")
    missing_persons_unit: str = Field(..., alias="missingPersonsUnit")
    email: str
    address: str


class BoundingBoxSchema(_ProfileModel):
    min_lat: float = Field(..., ge=-90, le=90, alias="minLat")
    max_lat: float = Field(..., ge=-90, le=90, alias="maxLat")
    min_lng: float = Field(..., ge=-180, le=180, alias="minLng")
    max_lng: float = Field(..., ge=-180, le=180, alias="maxLng")

    @model_validator(mode="after")
    def validate_corners(self) -> "BoundingBoxSchema":
        if self.min_lat > self.max_lat or self.min_lng > self.max_lng:
            raise ValueError("bounding box minimums must not exceed maximums")
        return self


class ServiceAreaSchema(_ProfileModel):
    bounding_box: Optional[BoundingBoxSchema] = Field(None, alias="boundingBox")
    cities: list[str] = Field(default_factory=list)
    provinces: list[str] = Field(default_factory=list)


# =============================================================================
# Jurisdiction Profile Schema (Top-Level)
# =============================================================================

class JurisdictionProfileSchema(_ProfileModel):
    """Top-level schema for a jurisdiction profile document."""
    schema_version: str = Field(SCHEMA_VERSION, alias="schemaVersion")
    id: str = Field(..., pattern=PROFILE_ID_PATTERN)
    name: str = Field(..., min_length=1)
    region: str
    country: str
    language: LanguageValue
    version: str = Field("1", description="Profile version string")

    priority_weights: PriorityWeightsSchema = Field(..., alias="priorityWeights")
    integrations: IntegrationsSchema
    legal_requirements: LegalRequirementsSchema = Field(..., alias="legalRequirements")
    contacts: ContactsSchema
    service_area: Optional[ServiceAreaSchema] = Field(None, alias="serviceArea")


# =============================================================================
# Validation
# =============================================================================

@dataclass
class ValidationResult:
    """Structured outcome of profile validation."""
    valid: bool
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"valid": self.valid, "errors": list(self.errors)}


def _format_error(error: Mapping[str, Any]) -> str:
    loc = ".".join(str(part) for part in error.get("loc", ()))
    msg = error.get("msg", "invalid value")
    return f"{loc}: {msg}" if loc else msg


def format_validation_errors(exc: ValidationError) -> list[str]:
    """Flatten a pydantic ValidationError into 'path: message' strings."""
    return [_format_error(e) for e in exc.errors()]


def missing_required_fields(data: Mapping[str, Any]) -> list[str]:
    """Required top-level keys absent from a profile document."""
    missing = []
    for camel, snake in REQUIRED_FIELDS:
        if data.get(camel) is None and data.get(snake) is None:
            missing.append(camel)
    return missing


def validate_profile(candidate: Any) -> ValidationResult:
    """
    Validate a jurisdiction profile document.

    Checks, in order:
    1. The candidate is a mapping
    2. Every required top-level key is present (reported all at once)
    3. Full schema: id pattern, language, weight ranges, threshold order,
       integration/legal/contact field types

    Never raises and never repairs: an invalid profile is rejected with
    its list of errors.

    Args:
        candidate: Dictionary loaded from YAML/JSON

    Returns:
        ValidationResult with valid flag and error strings
    """
    if not isinstance(candidate, Mapping):
        return ValidationResult(valid=False, errors=["Profile must be an object"])

    missing = missing_required_fields(candidate)
    if missing:
        return ValidationResult(
            valid=False,
            errors=[f"Missing required field: {name}" for name in missing],
        )

    try:
        JurisdictionProfileSchema.model_validate(dict(candidate))
    except ValidationError as e:
        return ValidationResult(valid=False, errors=format_validation_errors(e))

    return ValidationResult(valid=True)


def parse_profile(data: Mapping[str, Any]) -> JurisdictionProfileSchema:
    """
    Validate a profile document against the schema.

    Raises:
        pydantic.ValidationError: If validation fails
    """
    return JurisdictionProfileSchema.model_validate(dict(data))


def check_schema_version(data: Mapping[str, Any]) -> bool:
    """Check that a document's schema_version major matches SCHEMA_VERSION."""
    pack_version = data.get("schema_version") or data.get("schemaVersion") or SCHEMA_VERSION
    pack_major = str(pack_version).split(".")[0]
    current_major = SCHEMA_VERSION.split(".")[0]
    return pack_major == current_major
