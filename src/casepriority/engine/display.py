"""
casepriority Priority Display Resolver

Static bilingual presentation metadata for each priority level. Colors are
Tailwind utility classes consumed by the dashboards.

This table is presentation only: nothing here derives, validates or
changes a level.
"""
from __future__ import annotations

from types import MappingProxyType

from ..exceptions import InvalidPriorityLevelError
from ..models import PriorityDisplay, PriorityLevel


_DISPLAYS = MappingProxyType({
    PriorityLevel.CRITICAL: PriorityDisplay(
        level=PriorityLevel.CRITICAL,
        label="CRITICAL",
        label_fr="CRITIQUE",
        color="text-red-700",
        bg_color="bg-red-100",
        description="Immediate response required - all resources mobilized",
        description_fr="Réponse immédiate requise - toutes les ressources mobilisées",
    ),
    PriorityLevel.HIGH: PriorityDisplay(
        level=PriorityLevel.HIGH,
        label="HIGH",
        label_fr="ÉLEVÉ",
        color="text-orange-700",
        bg_color="bg-orange-100",
        description="Urgent investigation - priority allocation",
        description_fr="Enquête urgente - allocation prioritaire",
    ),
    PriorityLevel.MEDIUM: PriorityDisplay(
        level=PriorityLevel.MEDIUM,
        label="MEDIUM",
        label_fr="MOYEN",
        color="text-yellow-700",
        bg_color="bg-yellow-100",
        description="Active investigation - standard resources",
        description_fr="Enquête active - ressources standard",
    ),
    PriorityLevel.LOW: PriorityDisplay(
        level=PriorityLevel.LOW,
        label="LOW",
        label_fr="FAIBLE",
        color="text-green-700",
        bg_color="bg-green-100",
        description="Monitoring status - periodic review",
        description_fr="Statut de surveillance - révision périodique",
    ),
    PriorityLevel.MINIMAL: PriorityDisplay(
        level=PriorityLevel.MINIMAL,
        label="MINIMAL",
        label_fr="MINIMAL",
        color="text-gray-700",
        bg_color="bg-gray-100",
        description="Registered - passive monitoring",
        description_fr="Enregistré - surveillance passive",
    ),
})


def get_priority_display(level: int) -> PriorityDisplay:
    """
    Display metadata for a priority level.

    Raises:
        InvalidPriorityLevelError: If level is not an integer in 0..4
    """
    coerced = PriorityLevel.coerce(level)
    if coerced is None:
        raise InvalidPriorityLevelError(
            message=f"Priority level must be an integer 0-4, got {level!r}",
            details={"level": repr(level)},
        )
    return _DISPLAYS[coerced]


def list_priority_displays() -> list[PriorityDisplay]:
    """All five levels, most urgent first."""
    return [_DISPLAYS[level] for level in PriorityLevel]
