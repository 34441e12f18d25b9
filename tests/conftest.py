"""
Pytest configuration and fixtures for casepriority tests.

Provides helper factories for profile documents, profiles and registries,
plus fixtures for the packaged registry and engine.
"""
import copy

import pytest

from casepriority.models import (
    Contacts,
    Integrations,
    JurisdictionProfile,
    LegalRequirements,
    PriorityThresholds,
    PriorityWeights,
    ProfileLanguage,
)
from casepriority.engine import PriorityEngine
from casepriority.profiles import ProfileRegistry, load_builtin_profiles


# =============================================================================
# Factory Helpers
# =============================================================================

SPVM_WEIGHTS = {
    "ageUnder12": 30,
    "age12to17": 20,
    "ageOver65": 15,
    "mentalHealthCondition": 25,
    "medicalDependency": 30,
    "suicidalRisk": 35,
    "suspectedAbduction": 40,
    "domesticViolenceHistory": 25,
    "outOfCharacter": 15,
    "noFinancialResources": 10,
    "adverseWeather": 10,
    "missingOver24Hours": 10,
    "missingOver48Hours": 20,
    "missingOver72Hours": 30,
    "thresholds": {
        "priority0": 80,
        "priority1": 60,
        "priority2": 40,
        "priority3": 20,
    },
}


def make_profile_doc(**overrides) -> dict:
    """Create a valid camelCase profile document; top-level keys can be overridden."""
    doc = {
        "schema_version": "1.0.0",
        "id": "test_jurisdiction",
        "name": "Test Jurisdiction",
        "region": "Test Region",
        "country": "CA",
        "language": "en",
        "version": "1",
        "priorityWeights": copy.deepcopy(SPVM_WEIGHTS),
        "integrations": {
            "hospitalRegistry": False,
            "morgueRegistry": False,
            "borderServices": False,
            "detentionFacilities": False,
            "socialServices": False,
            "transitAuthority": False,
        },
        "legalRequirements": {
            "waitingPeriodHours": 0,
            "parentalConsentRequired": True,
            "dataRetentionDays": 365,
            "privacyLawReference": "Test Privacy Act",
            "mandatoryReporting": [],
        },
        "contacts": {
            "emergencyLine": "911",
            "nonEmergencyLine": "555-0100",
            "missingPersonsUnit": "Missing Persons",
            "email": "missing@example.org",
            "address": "1 Main Street",
        },
    }
    doc.update(overrides)
    return doc


def make_weights(thresholds: tuple[int, int, int, int] = (80, 60, 40, 20), **overrides) -> PriorityWeights:
    """Create PriorityWeights with SPVM defaults."""
    values = dict(
        age_under_12=30,
        age_12_to_17=20,
        age_over_65=15,
        mental_health_condition=25,
        medical_dependency=30,
        suicidal_risk=35,
        suspected_abduction=40,
        domestic_violence_history=25,
        out_of_character=15,
        no_financial_resources=10,
        adverse_weather=10,
        missing_over_24_hours=10,
        missing_over_48_hours=20,
        missing_over_72_hours=30,
    )
    values.update(overrides)
    p0, p1, p2, p3 = thresholds
    return PriorityWeights(
        thresholds=PriorityThresholds(priority0=p0, priority1=p1, priority2=p2, priority3=p3),
        **values,
    )


def make_profile(
    id: str = "test_jurisdiction",
    version: str = "1",
    weights: PriorityWeights = None,
    country: str = "CA",
    service_area=None,
) -> JurisdictionProfile:
    """Create a JurisdictionProfile with required fields."""
    return JurisdictionProfile(
        id=id,
        name=f"Profile {id}",
        region="Test Region",
        country=country,
        language=ProfileLanguage.EN,
        priority_weights=weights or make_weights(),
        integrations=Integrations(),
        legal_requirements=LegalRequirements(
            waiting_period_hours=0,
            parental_consent_required=True,
            data_retention_days=365,
            privacy_law_reference="Test Privacy Act",
        ),
        contacts=Contacts(
            emergency_line="911",
            non_emergency_line="555-0100",
            missing_persons_unit="Missing Persons",
            email="missing@example.org",
            address="1 Main Street",
        ),
        version=version,
        service_area=service_area,
    )


def make_registry(*profiles: JurisdictionProfile) -> ProfileRegistry:
    """Registry with a generic fallback plus the given profiles."""
    ids = {p.id for p in profiles}
    table = list(profiles)
    if "generic" not in ids:
        table.append(make_profile(id="generic"))
    return ProfileRegistry(table)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(scope="session")
def builtin_registry() -> ProfileRegistry:
    """Registry of the packaged profiles (qc_spvm_v1, generic)."""
    return ProfileRegistry(load_builtin_profiles())


@pytest.fixture
def engine(builtin_registry) -> PriorityEngine:
    return PriorityEngine(registry=builtin_registry, default_jurisdiction="qc_spvm_v1")


@pytest.fixture
def profile_doc() -> dict:
    return make_profile_doc()
