"""Request schemas for the API."""

from typing import Any, Optional

from pydantic import BaseModel, Field


class AssessmentRequest(BaseModel):
    """Request to assess a case's priority."""
    factors: dict[str, Any] = Field(
        default_factory=dict,
        description="Risk factors; snake_case or camelCase keys, unknown keys ignored",
    )
    jurisdiction_id: Optional[str] = Field(
        default=None,
        description="Jurisdiction profile ID, e.g. 'qc_spvm_v1'. Omit for the default.",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "jurisdiction_id": "qc_spvm_v1",
                    "factors": {
                        "age": 8,
                        "hoursMissing": 30,
                        "requiresDailyMedication": True,
                    },
                },
                {
                    "factors": {"age": 30, "hours_missing": 0, "suspected_abduction": True},
                },
            ]
        }
    }


class EscalationCheckRequest(BaseModel):
    """Request to check whether an unresolved case should be escalated."""
    current_level: Any = Field(..., description="Current priority level, 0 (critical) to 4 (minimal)")
    hours_missing: Any = Field(..., description="Hours the case has been unresolved")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"current_level": 4, "hours_missing": 50},
                {"current_level": 1, "hours_missing": 170},
            ]
        }
    }
