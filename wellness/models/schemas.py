"""
Pydantic Schemas

Defines request and response bodies for the guidance service endpoints:
- GuidanceRequest for /health-assist and /recommendations
- CombinedGuidanceResponse / RecommendationsResponse for their replies
- FollowUpRequest / FollowUpResponse for /follow-up
- ErrorResponse for failure bodies
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator


class GuidanceRequest(BaseModel):
    """Symptoms and optional report text sent for guidance."""

    symptoms: str
    medical_report: str = ""
    user_id: str


class FollowUpRequest(BaseModel):
    """A follow-up question about previously generated guidance."""

    user_id: str
    question: str


class _LenientResponse(BaseModel):
    """Base for response bodies: unknown keys ignored, nulls become defaults."""

    model_config = ConfigDict(extra="ignore")

    @field_validator("*", mode="before")
    @classmethod
    def _null_to_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            field = cls.model_fields[info.field_name]
            return field.get_default(call_default_factory=True)
        return value


class RecommendationsResponse(_LenientResponse):
    """Reply from /recommendations."""

    recommendations: list[str] = []


class CombinedGuidanceResponse(RecommendationsResponse):
    """Reply from /health-assist: recommendations plus per-agent notes."""

    synthesized_guidance: str = ""
    final_summary: str = ""
    symptom_analysis: str = ""
    lifestyle: str = ""
    diet: str = ""
    fitness: str = ""

    @property
    def summary(self) -> str:
        """Synthesized guidance, falling back to the final summary."""
        return self.synthesized_guidance or self.final_summary


class FollowUpResponse(_LenientResponse):
    """Reply from /follow-up."""

    answer: str = ""


class ErrorResponse(BaseModel):
    """Failure body returned by the guidance service."""

    error: Optional[str] = None
