"""
Guidance Client

Async HTTP wrapper for the wellness guidance service.
Translates controller intents into POST requests against the configured
base URL and returns parsed response models, or raises GuidanceServiceError
with a display-ready message.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from wellness.config import settings
from wellness.models.schemas import (
    CombinedGuidanceResponse,
    FollowUpRequest,
    FollowUpResponse,
    GuidanceRequest,
    RecommendationsResponse,
)

logger = logging.getLogger(__name__)

_ResponseT = TypeVar("_ResponseT", bound=BaseModel)

HEALTH_ASSIST_PATH = "/health-assist"
RECOMMENDATIONS_PATH = "/recommendations"
FOLLOW_UP_PATH = "/follow-up"

_NETWORK_ERROR = "Network Error"
_MALFORMED_BODY = "Malformed response from guidance service."


class GuidanceServiceError(Exception):
    """A failed exchange with the guidance service.

    ``message`` is the server-provided error string when the failure body
    carried one, otherwise a generic transport message.
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _error_message(response: httpx.Response) -> str:
    """Pull the ``error`` field out of a failure body, if there is one."""
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        err = payload.get("error")
        if isinstance(err, str) and err:
            return err
    return f"Request failed with status code {response.status_code}"


class GuidanceClient:
    """Client for the three guidance service operations.

    Every call is a single POST with no retry and no client-side timeout:
    a hung service suspends the caller until the transport itself fails.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self._transport = transport

    async def _post(
        self, path: str, body: BaseModel, response_model: type[_ResponseT]
    ) -> _ResponseT:
        """POST ``body`` to ``path`` and parse the reply into ``response_model``.

        Raises:
            GuidanceServiceError: On network failure or an unusable base URL,
                a non-success status, or a body that is not a JSON object of
                the expected shape.
        """
        logger.info("POST %s%s", self.base_url, path)
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=None,
                transport=self._transport,
            ) as client:
                response = await client.post(path, json=body.model_dump())
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("Guidance service unreachable at %s: %s", path, exc)
            raise GuidanceServiceError(str(exc) or _NETWORK_ERROR) from exc

        if response.is_error:
            message = _error_message(response)
            logger.warning(
                "Guidance service returned %s for %s: %s",
                response.status_code, path, message,
            )
            raise GuidanceServiceError(message, status_code=response.status_code)

        try:
            payload: Any = response.json()
        except ValueError as exc:
            logger.warning("Non-JSON body from %s", path)
            raise GuidanceServiceError(
                _MALFORMED_BODY, status_code=response.status_code
            ) from exc
        if not isinstance(payload, dict):
            logger.warning("Expected a JSON object from %s, got %s", path, type(payload).__name__)
            raise GuidanceServiceError(_MALFORMED_BODY, status_code=response.status_code)

        try:
            return response_model.model_validate(payload)
        except ValidationError as exc:
            logger.warning("Unexpected body shape from %s: %s", path, exc)
            raise GuidanceServiceError(
                _MALFORMED_BODY, status_code=response.status_code
            ) from exc

    async def request_combined_guidance(
        self, symptoms: str, medical_report: str, user_id: str
    ) -> CombinedGuidanceResponse:
        """Run every analysis agent and the synthesizer (/health-assist)."""
        body = GuidanceRequest(
            symptoms=symptoms, medical_report=medical_report, user_id=user_id
        )
        return await self._post(HEALTH_ASSIST_PATH, body, CombinedGuidanceResponse)

    async def request_recommendations_only(
        self, symptoms: str, medical_report: str, user_id: str
    ) -> RecommendationsResponse:
        """Fetch the recommendation list alone (/recommendations)."""
        body = GuidanceRequest(
            symptoms=symptoms, medical_report=medical_report, user_id=user_id
        )
        return await self._post(RECOMMENDATIONS_PATH, body, RecommendationsResponse)

    async def request_follow_up_answer(
        self, user_id: str, question: str
    ) -> FollowUpResponse:
        """Ask a follow-up question; the service recovers context from user_id."""
        body = FollowUpRequest(user_id=user_id, question=question)
        return await self._post(FOLLOW_UP_PATH, body, FollowUpResponse)
