"""
casepriority Jurisdiction Profile Models

A jurisdiction profile is versioned, region-specific configuration: the
scoring weights and thresholds, plus descriptive metadata (integrations,
legal requirements, contacts) that the engine carries but does not score.

Profiles are loaded from YAML/JSON at startup and never edited in place.
Every model here is a frozen dataclass; a changed profile is a new version
with a new ID or version string.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .enums import ProfileLanguage


# =============================================================================
# Scoring Configuration
# =============================================================================

@dataclass(frozen=True)
class PriorityThresholds:
    """
    Minimum score for each priority level.

    Invariant (enforced by the schema): priority3 < priority2 < priority1 < priority0.
    """
    priority0: int
    priority1: int
    priority2: int
    priority3: int


@dataclass(frozen=True)
class PriorityWeights:
    """Integer weight for every recognized risk factor, plus level thresholds."""
    age_under_12: int
    age_12_to_17: int
    age_over_65: int
    mental_health_condition: int
    medical_dependency: int
    suicidal_risk: int
    suspected_abduction: int
    domestic_violence_history: int
    out_of_character: int
    no_financial_resources: int
    adverse_weather: int
    missing_over_24_hours: int
    missing_over_48_hours: int
    missing_over_72_hours: int
    thresholds: PriorityThresholds

    def weight(self, key: str) -> int:
        """Look up a weight by field name."""
        value = getattr(self, key, None)
        if not isinstance(value, int):
            raise KeyError(key)
        return value


# =============================================================================
# Descriptive Metadata
# =============================================================================

@dataclass(frozen=True)
class Integrations:
    """External registries enabled for the jurisdiction (informational)."""
    hospital_registry: bool = False
    morgue_registry: bool = False
    border_services: bool = False
    detention_facilities: bool = False
    social_services: bool = False
    transit_authority: bool = False


@dataclass(frozen=True)
class LegalRequirements:
    waiting_period_hours: int
    parental_consent_required: bool
    data_retention_days: int
    privacy_law_reference: str
    mandatory_reporting: tuple[str, ...] = ()


@dataclass(frozen=True)
class Contacts:
    emergency_line: str
    non_emergency_line: str
    missing_persons_unit: str
    email: str
    address: str


@dataclass(frozen=True)
class BoundingBox:
    """Inclusive latitude/longitude rectangle."""
    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float

    def contains(self, lat: float, lng: float) -> bool:
        return self.min_lat <= lat <= self.max_lat and self.min_lng <= lng <= self.max_lng


@dataclass(frozen=True)
class ServiceArea:
    """
    Where a jurisdiction applies, for automatic profile selection.

    City names match as case-insensitive substrings of the supplied city;
    provinces match exactly (case-insensitive).
    """
    bounding_box: Optional[BoundingBox] = None
    cities: tuple[str, ...] = ()
    provinces: tuple[str, ...] = ()


# =============================================================================
# Jurisdiction Profile
# =============================================================================

@dataclass(frozen=True)
class JurisdictionProfile:
    """
    Immutable jurisdiction configuration.

    Attributes:
        id: Lowercase identifier ([a-z0-9_]+), e.g. "qc_spvm_v1"
        name: Human-readable name
        region: Province/state or metropolitan region
        country: Country code or name
        language: Operating language(s)
        priority_weights: Weight table and thresholds used for scoring
        integrations: Enabled external registries (not scored)
        legal_requirements: Legal metadata (not scored)
        contacts: Contact metadata (not scored)
        version: Profile version string
        schema_version: Document schema version the profile was written for
        service_area: Optional area used by profile selection
    """
    id: str
    name: str
    region: str
    country: str
    language: ProfileLanguage
    priority_weights: PriorityWeights
    integrations: Integrations
    legal_requirements: LegalRequirements
    contacts: Contacts
    version: str = "1"
    schema_version: str = "1.0.0"
    service_area: Optional[ServiceArea] = field(default=None, compare=False)

    @property
    def thresholds(self) -> PriorityThresholds:
        return self.priority_weights.thresholds

    def summary(self) -> dict[str, object]:
        """Short serializable description for listings."""
        return {
            "id": self.id,
            "name": self.name,
            "region": self.region,
            "country": self.country,
            "language": self.language.value,
            "version": self.version,
        }
