"""
casepriority Jurisdiction Selection

Chooses a jurisdiction profile from a case location when the intake form
does not name one. Matching is driven by each profile's service_area, so
adding a jurisdiction is a data change.

Profiles are checked in ID order; the first match wins. No match returns
the registry fallback with fallback_used=True.
"""
from __future__ import annotations

import math
from typing import Optional

from .registry import ProfileRegistry, ProfileResolution


def _is_coordinate(value: object) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def select_by_location(registry: ProfileRegistry, lat: float, lng: float) -> ProfileResolution:
    """Select the profile whose service-area bounding box contains (lat, lng)."""
    if _is_coordinate(lat) and _is_coordinate(lng):
        for profile in registry.profiles():
            area = profile.service_area
            if area is None or area.bounding_box is None:
                continue
            if area.bounding_box.contains(lat, lng):
                return ProfileResolution(profile=profile, requested_id=profile.id)
    return ProfileResolution(profile=registry.fallback, requested_id=None, fallback_used=True)


def select_by_address(
    registry: ProfileRegistry,
    city: Optional[str] = None,
    province: Optional[str] = None,
    country: Optional[str] = None,
) -> ProfileResolution:
    """
    Select a profile from address components.

    City is matched first (case-insensitive substring, so "Montréal-Nord"
    matches "montréal"), then province. When country is given, profiles
    for other countries are skipped.
    """
    city_norm = city.strip().lower() if isinstance(city, str) and city.strip() else None
    province_norm = (
        province.strip().lower() if isinstance(province, str) and province.strip() else None
    )
    country_norm = (
        country.strip().lower() if isinstance(country, str) and country.strip() else None
    )

    candidates = [
        p for p in registry.profiles()
        if p.service_area is not None
        and (country_norm is None or p.country.lower() == country_norm)
    ]

    if city_norm:
        for profile in candidates:
            if any(name.lower() in city_norm for name in profile.service_area.cities):
                return ProfileResolution(profile=profile, requested_id=profile.id)

    if province_norm:
        for profile in candidates:
            if any(name.lower() == province_norm for name in profile.service_area.provinces):
                return ProfileResolution(profile=profile, requested_id=profile.id)

    return ProfileResolution(profile=registry.fallback, requested_id=None, fallback_used=True)
