from __future__ import annotations

import asyncio
from typing import Any

import pytest

from wellness.core.guidance_client import GuidanceServiceError
from wellness.core.session_controller import SessionController
from wellness.models.schemas import (
    CombinedGuidanceResponse,
    FollowUpResponse,
    RecommendationsResponse,
)


class FakeGuidanceClient:
    """Records every call and replies with queued bodies or errors."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.combined: list[dict[str, Any] | Exception] = []
        self.recommendations: list[dict[str, Any] | Exception] = []
        self.follow_ups: list[dict[str, Any] | Exception] = []
        self.gates: list[asyncio.Event] = []

    async def _reply(self, queue: list, model):
        item = queue.pop(0) if queue else {}
        if self.gates:
            await self.gates.pop(0).wait()
        if isinstance(item, Exception):
            raise item
        return model.model_validate(item)

    async def request_combined_guidance(self, symptoms, medical_report, user_id):
        self.calls.append(("combined", (symptoms, medical_report, user_id)))
        return await self._reply(self.combined, CombinedGuidanceResponse)

    async def request_recommendations_only(self, symptoms, medical_report, user_id):
        self.calls.append(("recommendations", (symptoms, medical_report, user_id)))
        return await self._reply(self.recommendations, RecommendationsResponse)

    async def request_follow_up_answer(self, user_id, question):
        self.calls.append(("follow_up", (user_id, question)))
        return await self._reply(self.follow_ups, FollowUpResponse)


@pytest.fixture
def fake_client() -> FakeGuidanceClient:
    return FakeGuidanceClient()


@pytest.fixture
def controller(fake_client) -> SessionController:
    return SessionController("user-1", client=fake_client, discard_stale_responses=False)


@pytest.fixture
def service_error():
    def _make(message: str = "boom", status_code: int | None = 500) -> GuidanceServiceError:
        return GuidanceServiceError(message, status_code=status_code)

    return _make
