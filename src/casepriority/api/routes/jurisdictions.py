"""Jurisdiction profile endpoints."""

from typing import Any, Optional

from fastapi import APIRouter, Body, HTTPException

from casepriority.api.schemas.responses import (
    JurisdictionDetail,
    JurisdictionSelection,
    JurisdictionSummary,
    ProfileValidationResponse,
)
from casepriority.canon import compute_profile_hash
from casepriority.profiles import (
    ProfileRegistry,
    ProfileResolution,
    get_default_registry,
    profile_to_document,
    select_by_address,
    select_by_location,
    validate_profile,
)

router = APIRouter(prefix="/jurisdictions", tags=["Jurisdictions"])

# Shared registry instance (set by main.py)
registry: Optional[ProfileRegistry] = None


def set_registry(r: ProfileRegistry):
    global registry
    registry = r


def get_registry() -> ProfileRegistry:
    global registry
    if registry is None:
        registry = get_default_registry()
    return registry


def _selection(resolution: ProfileResolution) -> JurisdictionSelection:
    return JurisdictionSelection(
        jurisdiction_id=resolution.profile.id,
        name=resolution.profile.name,
        fallback_used=resolution.fallback_used,
    )


@router.get("", response_model=list[JurisdictionSummary])
async def list_jurisdictions(country: Optional[str] = None):
    """
    List registered jurisdiction profiles.

    Optionally filter by country, e.g. `CA`.
    """
    reg = get_registry()
    profiles = reg.profiles()
    if country:
        profiles = [p for p in profiles if p.country.lower() == country.lower()]
    return [
        JurisdictionSummary(**p.summary(), is_fallback=(p.id == reg.fallback_id))
        for p in profiles
    ]


@router.get("/select", response_model=JurisdictionSelection)
async def select_jurisdiction(
    lat: Optional[float] = None,
    lng: Optional[float] = None,
    city: Optional[str] = None,
    province: Optional[str] = None,
    country: Optional[str] = None,
):
    """
    Pick a profile from a case location.

    Pass either `lat` and `lng`, or any of `city`, `province`, `country`.
    No match returns the generic profile with `fallback_used: true`.
    """
    reg = get_registry()
    if lat is not None and lng is not None:
        return _selection(select_by_location(reg, lat, lng))
    if city or province or country:
        return _selection(select_by_address(reg, city=city, province=province, country=country))
    raise HTTPException(
        status_code=400,
        detail="Provide lat and lng, or at least one of city, province, country",
    )


@router.post("/validate", response_model=ProfileValidationResponse)
async def validate_jurisdiction(candidate: Any = Body(...)):
    """
    Validate a candidate profile document without registering it.

    Always returns 200; problems are listed in `errors`.
    """
    result = validate_profile(candidate)
    return ProfileValidationResponse(valid=result.valid, errors=result.errors)


@router.get("/{jurisdiction_id}", response_model=JurisdictionDetail)
async def get_jurisdiction(jurisdiction_id: str):
    """
    Resolve a jurisdiction ID.

    Unknown IDs resolve to the generic profile; `fallback_used` reports it.
    """
    resolution = get_registry().resolve_with_status(jurisdiction_id)
    profile = resolution.profile
    return JurisdictionDetail(
        requested_id=jurisdiction_id,
        fallback_used=resolution.fallback_used,
        profile_hash=compute_profile_hash(profile),
        profile=profile_to_document(profile),
    )
