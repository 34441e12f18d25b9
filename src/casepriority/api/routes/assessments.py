"""Priority assessment endpoint."""

import logging
from typing import Optional

from fastapi import APIRouter, Request

from casepriority.api.schemas.requests import AssessmentRequest
from casepriority.api.schemas.responses import AssessmentResponse
from casepriority.engine import PriorityEngine

router = APIRouter(prefix="/assessments", tags=["Assessments"])

logger = logging.getLogger(__name__)

# Shared engine instance (set by main.py)
engine: Optional[PriorityEngine] = None


def set_engine(e: PriorityEngine):
    global engine
    engine = e


def get_engine() -> PriorityEngine:
    global engine
    if engine is None:
        engine = PriorityEngine()
    return engine


@router.post("", response_model=AssessmentResponse)
async def assess_case(body: AssessmentRequest, request: Request):
    """
    Score a case's risk factors and return its priority level.

    Unknown jurisdiction IDs are scored with the generic profile and the
    response carries `fallback_used: true`.
    """
    result = get_engine().assess(body.factors, body.jurisdiction_id)

    logger.info(
        "Assessment completed",
        extra={
            "request_id": getattr(request.state, "request_id", "unknown"),
            "jurisdiction": result.jurisdiction,
            "level": int(result.level),
            "score": result.score,
            "fallback_used": result.fallback_used,
        },
    )
    return AssessmentResponse(**result.to_dict())
