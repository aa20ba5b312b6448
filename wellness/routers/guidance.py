"""
Guidance Router (stub service)

POST /health-assist    - Combined guidance with per-agent notes
POST /recommendations  - Recommendation list only
POST /follow-up        - Answer a question about the user's latest guidance

Failures are returned as ``{"error": "<message>"}`` bodies.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from wellness.agents.stub_guidance import answer_follow_up, run_guidance
from wellness.memory.guidance_store import guidance_store
from wellness.models.schemas import (
    CombinedGuidanceResponse,
    ErrorResponse,
    FollowUpRequest,
    FollowUpResponse,
    GuidanceRequest,
    RecommendationsResponse,
)

router = APIRouter()

NO_GUIDANCE_ERROR = "No guidance found for this user. Generate guidance first."


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


def _check_guidance_request(request: GuidanceRequest) -> JSONResponse | None:
    if not request.symptoms.strip():
        return error_response(400, "Symptoms are required.")
    if not request.user_id.strip():
        return error_response(400, "user_id is required.")
    return None


# ── POST /health-assist ──────────────────────────────────────────────────────

@router.post("/health-assist", response_model=None)
async def health_assist(request: GuidanceRequest) -> Any:
    """Run every agent and return the synthesized plan with agent notes."""
    rejected = _check_guidance_request(request)
    if rejected is not None:
        return rejected

    body = run_guidance(request.symptoms, request.medical_report)
    guidance_store.save_guidance(request.user_id, body)
    return CombinedGuidanceResponse(**body).model_dump()


# ── POST /recommendations ────────────────────────────────────────────────────

@router.post("/recommendations", response_model=None)
async def recommendations(request: GuidanceRequest) -> Any:
    """Return only the recommendation list."""
    rejected = _check_guidance_request(request)
    if rejected is not None:
        return rejected

    body = run_guidance(request.symptoms, request.medical_report)
    guidance_store.save_guidance(request.user_id, body)
    return RecommendationsResponse(
        recommendations=body["recommendations"]
    ).model_dump()


# ── POST /follow-up ──────────────────────────────────────────────────────────

@router.post("/follow-up", response_model=None)
async def follow_up(request: FollowUpRequest) -> Any:
    """Answer from the guidance stored for ``user_id``."""
    if not request.question.strip():
        return error_response(400, "Question is required.")

    guidance = guidance_store.get_guidance(request.user_id)
    if guidance is None:
        return error_response(404, NO_GUIDANCE_ERROR)

    previous_turns = guidance_store.get_follow_ups(request.user_id)
    answer = answer_follow_up(guidance, request.question, previous_turns)
    guidance_store.append_follow_up(request.user_id, request.question, answer)
    return FollowUpResponse(answer=answer).model_dump()
