"""
casepriority Jurisdiction Profile Registry

Immutable, process-wide lookup of jurisdiction profiles.

Key properties:
- resolve() is total: unknown, empty or non-string IDs return the fallback
  (generic) profile, never "not found"
- resolve_with_status() reports whether that fallback happened
- No mutation API: with_profiles() returns a new registry, so a new profile
  version is deployed by swapping registries, not by editing one in place

Usage:
    registry = ProfileRegistry(load_builtin_profiles())
    profile = registry.resolve("qc_spvm_v1")

    resolution = registry.resolve_with_status("on_tps_v1")
    if resolution.fallback_used:
        ...
"""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Optional

from ..config import FALLBACK_JURISDICTION, load_settings
from ..exceptions import DuplicateProfileError, FallbackProfileMissingError
from ..models import JurisdictionProfile
from .loader import ProfileLoader, load_builtin_profiles
from .schema import ValidationResult, validate_profile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProfileResolution:
    """
    Result of resolving a jurisdiction ID.

    Attributes:
        profile: The profile to use
        requested_id: The ID the caller asked for (None if omitted)
        fallback_used: True if the requested ID was unknown and the
            fallback profile was substituted
    """
    profile: JurisdictionProfile
    requested_id: Optional[str]
    fallback_used: bool = False


class ProfileRegistry:
    """
    Read-only registry of jurisdiction profiles.

    Safe to share between threads: the profile mapping is built once in
    the constructor and exposed only through read-only views.
    """

    def __init__(
        self,
        profiles: Iterable[JurisdictionProfile],
        fallback_id: str = FALLBACK_JURISDICTION,
    ):
        """
        Build a registry.

        Args:
            profiles: Profiles to register (IDs must be unique)
            fallback_id: ID of the profile returned for unknown IDs

        Raises:
            DuplicateProfileError: If two profiles share an ID
            FallbackProfileMissingError: If no profile has fallback_id
        """
        table: dict[str, JurisdictionProfile] = {}
        for profile in profiles:
            if profile.id in table:
                raise DuplicateProfileError(
                    message=f"Duplicate jurisdiction profile ID: '{profile.id}'",
                    jurisdiction_id=profile.id,
                )
            table[profile.id] = profile

        if fallback_id not in table:
            raise FallbackProfileMissingError(
                message=f"Fallback profile '{fallback_id}' is not registered",
                details={"registered": sorted(table)},
                jurisdiction_id=fallback_id,
            )

        self._profiles = MappingProxyType(table)
        self._fallback_id = fallback_id

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    @property
    def fallback(self) -> JurisdictionProfile:
        return self._profiles[self._fallback_id]

    @property
    def fallback_id(self) -> str:
        return self._fallback_id

    def get(self, jurisdiction_id: Any) -> Optional[JurisdictionProfile]:
        """Exact lookup without fallback."""
        if not isinstance(jurisdiction_id, str):
            return None
        return self._profiles.get(jurisdiction_id)

    def resolve(self, jurisdiction_id: Any) -> JurisdictionProfile:
        """Resolve an ID to a profile; unknown IDs return the fallback profile."""
        return self.resolve_with_status(jurisdiction_id).profile

    def resolve_with_status(self, jurisdiction_id: Any) -> ProfileResolution:
        """Resolve an ID and report whether the fallback profile was substituted."""
        requested = jurisdiction_id if isinstance(jurisdiction_id, str) else None
        profile = self.get(jurisdiction_id)
        if profile is not None:
            return ProfileResolution(profile=profile, requested_id=requested)

        if requested:
            logger.warning(
                "Unknown jurisdiction '%s'; falling back to '%s'",
                requested,
                self._fallback_id,
            )
        return ProfileResolution(
            profile=self.fallback,
            requested_id=requested,
            fallback_used=True,
        )

    # -------------------------------------------------------------------------
    # Enumeration
    # -------------------------------------------------------------------------

    def ids(self) -> list[str]:
        return sorted(self._profiles)

    def profiles(self) -> list[JurisdictionProfile]:
        return [self._profiles[pid] for pid in self.ids()]

    def __contains__(self, jurisdiction_id: object) -> bool:
        return jurisdiction_id in self._profiles

    def __len__(self) -> int:
        return len(self._profiles)

    def __iter__(self) -> Iterator[JurisdictionProfile]:
        return iter(self.profiles())

    # -------------------------------------------------------------------------
    # Versioning
    # -------------------------------------------------------------------------

    def with_profiles(self, *profiles: JurisdictionProfile) -> "ProfileRegistry":
        """
        Return a new registry with the given profiles added or replaced.

        The current registry is left untouched.
        """
        table = dict(self._profiles)
        for profile in profiles:
            if profile.id in table:
                logger.info(
                    "Replacing jurisdiction profile %s v%s with v%s",
                    profile.id,
                    table[profile.id].version,
                    profile.version,
                )
            table[profile.id] = profile
        return ProfileRegistry(table.values(), fallback_id=self._fallback_id)

    def validate_all(self) -> dict[str, ValidationResult]:
        """Re-validate every registered profile (build-time check)."""
        results: dict[str, ValidationResult] = {}
        for profile in self.profiles():
            result = validate_profile(profile_to_document(profile))
            if not result.valid:
                logger.error(
                    "Jurisdiction profile '%s' is invalid: %s", profile.id, result.errors
                )
            results[profile.id] = result
        return results


def profile_to_document(profile: JurisdictionProfile) -> dict[str, Any]:
    """Serialize a profile back to a snake_case profile document."""
    doc = asdict(profile)
    doc["language"] = profile.language.value
    doc["legal_requirements"]["mandatory_reporting"] = list(
        profile.legal_requirements.mandatory_reporting
    )
    area = doc.get("service_area")
    if area is None:
        doc.pop("service_area", None)
    else:
        area["cities"] = list(area["cities"])
        area["provinces"] = list(area["provinces"])
    return doc


# =============================================================================
# Default Registry
# =============================================================================

def build_default_registry() -> ProfileRegistry:
    """
    Build a registry from the packaged profiles plus CASEPRIORITY_PROFILES_DIR.

    Profiles in the extra directory replace packaged profiles with the same ID.
    """
    settings = load_settings()
    registry = ProfileRegistry(
        load_builtin_profiles(),
        fallback_id=settings.fallback_jurisdiction,
    )
    if settings.profiles_dir is not None:
        loader = ProfileLoader(strict_version=settings.strict_version)
        registry = registry.with_profiles(*loader.load_directory(settings.profiles_dir))
    return registry


@lru_cache(maxsize=1)
def get_default_registry() -> ProfileRegistry:
    """Process-wide registry, built on first use."""
    return build_default_registry()


def resolve_profile(
    jurisdiction_id: Any,
    registry: Optional[ProfileRegistry] = None,
) -> JurisdictionProfile:
    """Resolve a jurisdiction ID; never fails."""
    if registry is None:
        registry = get_default_registry()
    return registry.resolve(jurisdiction_id)
