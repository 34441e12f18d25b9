"""
casepriority Jurisdiction Profiles

Schema validation, loading, registry and selection for jurisdiction
profiles.

Jurisdiction profiles are YAML or JSON files that define the scoring
weights, level thresholds and descriptive metadata for one jurisdiction.

Usage:
    from casepriority.profiles import ProfileRegistry, load_builtin_profiles

    registry = ProfileRegistry(load_builtin_profiles())
    profile = registry.resolve("qc_spvm_v1")

    # Authoring-time check, never raises
    result = validate_profile(candidate_dict)
    if not result.valid:
        print(result.errors)
"""
from __future__ import annotations

from .loader import (
    BUILTIN_PROFILES_DIR,
    ProfileLoader,
    convert_profile,
    load_builtin_profiles,
    load_profile,
    load_profile_from_string,
)
from .registry import (
    ProfileRegistry,
    ProfileResolution,
    build_default_registry,
    get_default_registry,
    profile_to_document,
    resolve_profile,
)
from .schema import (
    PROFILE_ID_PATTERN,
    SCHEMA_VERSION,
    JurisdictionProfileSchema,
    ValidationResult,
    check_schema_version,
    validate_profile,
)
from .selector import select_by_address, select_by_location

__all__ = [
    # Version
    "SCHEMA_VERSION",
    "PROFILE_ID_PATTERN",
    # Loader
    "BUILTIN_PROFILES_DIR",
    "ProfileLoader",
    "convert_profile",
    "load_builtin_profiles",
    "load_profile",
    "load_profile_from_string",
    # Registry
    "ProfileRegistry",
    "ProfileResolution",
    "build_default_registry",
    "get_default_registry",
    "profile_to_document",
    "resolve_profile",
    # Validation
    "JurisdictionProfileSchema",
    "ValidationResult",
    "check_schema_version",
    "validate_profile",
    # Selection
    "select_by_address",
    "select_by_location",
]
