"""
casepriority Jurisdiction Profile Loader

Loads and validates jurisdiction profiles from YAML or JSON files.

Converts Pydantic schema models to casepriority domain models.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterator, Optional, Union

import yaml

from ..exceptions import ProfileLoadError, ProfileValidationError, ProfileVersionMismatch
from ..models import (
    BoundingBox,
    Contacts,
    Integrations,
    JurisdictionProfile,
    LegalRequirements,
    PriorityThresholds,
    PriorityWeights,
    ProfileLanguage,
    ServiceArea,
)
from .schema import (
    SCHEMA_VERSION,
    JurisdictionProfileSchema,
    PriorityWeightsSchema,
    ServiceAreaSchema,
    check_schema_version,
    parse_profile,
    validate_profile,
)

logger = logging.getLogger(__name__)

PROFILE_SUFFIXES = {".yaml", ".yml", ".json"}

# Profiles shipped with the package
BUILTIN_PROFILES_DIR = Path(__file__).parent / "data"


# =============================================================================
# Schema to Model Converters
# =============================================================================

def _convert_weights(schema: PriorityWeightsSchema) -> PriorityWeights:
    """Convert PriorityWeightsSchema to PriorityWeights model."""
    data = schema.model_dump(exclude={"thresholds"})
    return PriorityWeights(
        thresholds=PriorityThresholds(**schema.thresholds.model_dump()),
        **data,
    )


def _convert_service_area(schema: Optional[ServiceAreaSchema]) -> Optional[ServiceArea]:
    """Convert ServiceAreaSchema to ServiceArea model."""
    if schema is None:
        return None
    box = None
    if schema.bounding_box is not None:
        box = BoundingBox(**schema.bounding_box.model_dump())
    return ServiceArea(
        bounding_box=box,
        cities=tuple(schema.cities),
        provinces=tuple(schema.provinces),
    )


def convert_profile(schema: JurisdictionProfileSchema) -> JurisdictionProfile:
    """Convert a validated JurisdictionProfileSchema to the frozen model."""
    legal = schema.legal_requirements
    return JurisdictionProfile(
        id=schema.id,
        name=schema.name,
        region=schema.region,
        country=schema.country,
        language=ProfileLanguage(schema.language),
        priority_weights=_convert_weights(schema.priority_weights),
        integrations=Integrations(**schema.integrations.model_dump()),
        legal_requirements=LegalRequirements(
            waiting_period_hours=legal.waiting_period_hours,
            parental_consent_required=legal.parental_consent_required,
            data_retention_days=legal.data_retention_days,
            privacy_law_reference=legal.privacy_law_reference,
            mandatory_reporting=tuple(legal.mandatory_reporting),
        ),
        contacts=Contacts(**schema.contacts.model_dump()),
        version=schema.version,
        schema_version=schema.schema_version,
        service_area=_convert_service_area(schema.service_area),
    )


# =============================================================================
# Profile Loader
# =============================================================================

class ProfileLoader:
    """
    Loads jurisdiction profiles from YAML or JSON files.

    Usage:
        loader = ProfileLoader()
        profile = loader.load("profiles/qc_spvm_v1.yaml")
        profiles = loader.load_directory("profiles/")
    """

    def __init__(self, strict_version: bool = True):
        """
        Initialize the loader.

        Args:
            strict_version: If True, reject profiles with incompatible schema versions
        """
        self.strict_version = strict_version

    def load(self, path: Union[str, Path]) -> JurisdictionProfile:
        """
        Load a jurisdiction profile from a file.

        Args:
            path: Path to YAML or JSON file

        Returns:
            Loaded JurisdictionProfile

        Raises:
            ProfileLoadError: If file cannot be read or parsed
            ProfileVersionMismatch: If schema version incompatible
            ProfileValidationError: If validation fails
        """
        path = Path(path)

        try:
            data = self._load_file(path)
        except (OSError, UnicodeDecodeError, yaml.YAMLError, json.JSONDecodeError) as e:
            raise ProfileLoadError(
                message=f"Failed to load jurisdiction profile: {e}",
                details={"path": str(path), "error": str(e)},
            ) from e

        profile = self.load_dict(data, source=str(path))
        logger.info("Loaded jurisdiction profile %s v%s from %s", profile.id, profile.version, path)
        return profile

    def load_dict(self, data: Any, source: str = "<memory>") -> JurisdictionProfile:
        """
        Validate and convert an already-parsed profile document.

        Raises:
            ProfileVersionMismatch: If schema version incompatible
            ProfileValidationError: If validation fails
        """
        if isinstance(data, dict) and self.strict_version and not check_schema_version(data):
            pack_version = data.get("schema_version") or data.get("schemaVersion")
            raise ProfileVersionMismatch(
                message=f"Schema version mismatch: profile has {pack_version}, expected {SCHEMA_VERSION}",
                details={
                    "path": source,
                    "profile_version": pack_version,
                    "expected_version": SCHEMA_VERSION,
                },
                jurisdiction_id=data.get("id") if isinstance(data.get("id"), str) else None,
            )

        result = validate_profile(data)
        if not result.valid:
            raise ProfileValidationError(
                message=f"Jurisdiction profile validation failed: {len(result.errors)} errors",
                details={"errors": result.errors, "path": source},
            )

        return convert_profile(parse_profile(data))

    def load_directory(self, directory: Union[str, Path]) -> list[JurisdictionProfile]:
        """Load every YAML/JSON profile in a directory, sorted by filename."""
        return [self.load(path) for path in iter_profile_files(directory)]

    def _load_file(self, path: Path) -> Any:
        """Load data from YAML or JSON file."""
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                return json.load(f)
            return yaml.safe_load(f)


# =============================================================================
# Convenience Functions
# =============================================================================

def iter_profile_files(directory: Union[str, Path]) -> Iterator[Path]:
    """Profile documents in a directory, in deterministic order."""
    directory = Path(directory)
    for path in sorted(directory.iterdir()):
        if path.is_file() and path.suffix.lower() in PROFILE_SUFFIXES:
            yield path


def load_profile(path: Union[str, Path]) -> JurisdictionProfile:
    """Load a single jurisdiction profile with a temporary loader."""
    return ProfileLoader().load(path)


def load_profile_from_string(content: str, format: str = "yaml") -> JurisdictionProfile:
    """
    Load a jurisdiction profile from a string.

    Args:
        content: YAML or JSON string
        format: "yaml" or "json"

    Raises:
        ProfileLoadError: If the content cannot be parsed
        ProfileValidationError: If validation fails
    """
    try:
        if format.lower() == "json":
            data = json.loads(content)
        else:
            data = yaml.safe_load(content)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ProfileLoadError(
            message=f"Failed to parse jurisdiction profile: {e}",
            details={"format": format, "error": str(e)},
        ) from e
    return ProfileLoader().load_dict(data)


def load_builtin_profiles() -> list[JurisdictionProfile]:
    """Load the profiles shipped with the package."""
    return ProfileLoader().load_directory(BUILTIN_PROFILES_DIR)
