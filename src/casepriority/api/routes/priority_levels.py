"""Priority level display endpoints."""

from fastapi import APIRouter, HTTPException

from casepriority.api.schemas.responses import PriorityDisplayResponse
from casepriority.engine import get_priority_display, list_priority_displays
from casepriority.exceptions import InvalidPriorityLevelError

router = APIRouter(prefix="/priority-levels", tags=["Priority Levels"])


@router.get("", response_model=list[PriorityDisplayResponse])
async def list_levels():
    """Display metadata for all five levels, most urgent first."""
    return [PriorityDisplayResponse(**d.to_dict()) for d in list_priority_displays()]


@router.get("/{level}", response_model=PriorityDisplayResponse)
async def get_level(level: int):
    """Bilingual label, colors and description for one level."""
    try:
        display = get_priority_display(level)
    except InvalidPriorityLevelError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return PriorityDisplayResponse(**display.to_dict())
