"""Auto-escalation endpoint."""

from fastapi import APIRouter

from casepriority.api.schemas.requests import EscalationCheckRequest
from casepriority.api.schemas.responses import EscalationResponse
from casepriority.engine import check_auto_escalation

router = APIRouter(prefix="/escalations", tags=["Escalations"])


@router.post("/check", response_model=EscalationResponse, response_model_exclude_none=True)
async def check_escalation(body: EscalationCheckRequest):
    """
    Check whether an unresolved case should move up one priority level.

    Invalid levels or hours never error; they return `should_escalate: false`.
    """
    decision = check_auto_escalation(body.current_level, body.hours_missing)
    return EscalationResponse(**decision.to_dict())
