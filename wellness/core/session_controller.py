"""
Session Controller

Holds the Session for one wellness-guidance interaction and runs its two
commands:

  submit_guidance_request
    -> [empty symptoms] -> validation status, no request
    -> reset results -> /health-assist (full, agents) or /recommendations (reco)
    -> normalize response into session by the mode captured at submission

  submit_follow_up
    -> [empty question] -> validation status, no request
    -> clear answer -> /follow-up -> answer

Failures never escape a command: they become ``Error: ...`` status lines.
There is no in-flight lock.  Overlapping primary submissions race and the
last response to arrive wins, unless stale responses are configured to be
discarded.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from wellness.config import settings
from wellness.core.guidance_client import GuidanceClient, GuidanceServiceError
from wellness.models.schemas import CombinedGuidanceResponse, RecommendationsResponse
from wellness.models.session import AgentNotes, Mode, Session
from wellness.models.view_model import MarkdownRenderer, ViewModel, build_view_model
from wellness.prompts.status import (
    FOLLOW_UP_DONE,
    FOLLOW_UP_THINKING,
    GUIDANCE_DONE,
    GUIDANCE_PROCESSING,
    QUESTION_REQUIRED,
    SYMPTOMS_REQUIRED,
    format_error,
)

logger = logging.getLogger(__name__)


def _agent_notes_from(response: CombinedGuidanceResponse) -> AgentNotes:
    return AgentNotes(
        symptom_analysis=response.symptom_analysis,
        lifestyle=response.lifestyle,
        diet=response.diet,
        fitness=response.fitness,
    )


class SessionController:
    """Owns one Session and the commands that mutate it.

    Args:
        user_id: Opaque identity supplied by the auth layer.
        on_logout: Callback owned by the auth layer, invoked by ``logout``.
        client: Guidance service client; a default one is built from settings.
        discard_stale_responses: Drop a response when a newer submission of
            the same command has started since it was dispatched.
    """

    def __init__(
        self,
        user_id: str,
        on_logout: Optional[Callable[[], None]] = None,
        client: Optional[GuidanceClient] = None,
        discard_stale_responses: Optional[bool] = None,
    ) -> None:
        self.session = Session(user_id=user_id)
        self._on_logout = on_logout
        self._client = client or GuidanceClient()
        if discard_stale_responses is None:
            discard_stale_responses = settings.DISCARD_STALE_RESPONSES
        self._discard_stale = discard_stale_responses
        self._guidance_generation = 0
        self._follow_up_generation = 0

    # ── Input commands ──────────────────────────────────────────────────────

    def set_symptoms(self, text: str) -> None:
        self.session.symptoms = text

    def set_medical_report(self, text: str) -> None:
        self.session.medical_report = text

    def set_mode(self, mode: Mode | str) -> None:
        """Select the output mode; takes effect on the next submission."""
        self.session.mode = Mode(mode)

    def set_follow_up_question(self, text: str) -> None:
        self.session.follow_up.question = text

    def logout(self) -> None:
        """Hand control back to the auth layer."""
        if self._on_logout is not None:
            self._on_logout()

    # ── View ────────────────────────────────────────────────────────────────

    def view_model(self, render_markdown: Optional[MarkdownRenderer] = None) -> ViewModel:
        """Derive render-ready state for the presentation layer."""
        return build_view_model(self.session, render_markdown)

    # ── Primary guidance ────────────────────────────────────────────────────

    def _is_stale(self, generation: int, current: int) -> bool:
        return self._discard_stale and generation != current

    async def submit_guidance_request(self) -> None:
        """Validate input, reset results, and fetch guidance for the current mode."""
        session = self.session
        if not session.symptoms.strip():
            logger.info("Guidance request rejected: no symptoms entered")
            session.status = SYMPTOMS_REQUIRED
            return

        session.reset_for_guidance_request(GUIDANCE_PROCESSING)
        self._guidance_generation += 1
        generation = self._guidance_generation
        mode = session.mode
        symptoms = session.symptoms
        report = session.medical_report

        try:
            if mode.uses_combined_guidance:
                response: RecommendationsResponse = (
                    await self._client.request_combined_guidance(
                        symptoms, report, session.user_id
                    )
                )
            else:
                response = await self._client.request_recommendations_only(
                    symptoms, report, session.user_id
                )
        except GuidanceServiceError as exc:
            if self._is_stale(generation, self._guidance_generation):
                logger.info("Dropping stale guidance failure (generation %d)", generation)
                return
            session.status = format_error(exc.message)
            return

        if self._is_stale(generation, self._guidance_generation):
            logger.info("Dropping stale guidance response (generation %d)", generation)
            return
        self._apply_guidance(mode, response)

    def _apply_guidance(self, mode: Mode, response: RecommendationsResponse) -> None:
        """Write a successful response into the session in one step."""
        session = self.session
        if isinstance(response, CombinedGuidanceResponse):
            session.agent_notes = _agent_notes_from(response)

        session.recommendations = list(response.recommendations)
        if mode is Mode.FULL and isinstance(response, CombinedGuidanceResponse):
            session.summary = response.summary
        elif mode is Mode.AGENT_VIEW:
            session.summary = ""
            session.show_agent_view = True

        session.status = GUIDANCE_DONE

    # ── Follow-up ───────────────────────────────────────────────────────────

    async def submit_follow_up(self) -> None:
        """Ask the follow-up question about this user's latest guidance."""
        follow_up = self.session.follow_up
        question = follow_up.question
        if not question.strip():
            logger.info("Follow-up rejected: no question entered")
            follow_up.status = QUESTION_REQUIRED
            return

        follow_up.status = FOLLOW_UP_THINKING
        follow_up.answer = ""
        self._follow_up_generation += 1
        generation = self._follow_up_generation

        try:
            response = await self._client.request_follow_up_answer(
                self.session.user_id, question
            )
        except GuidanceServiceError as exc:
            if self._is_stale(generation, self._follow_up_generation):
                return
            # A primary submission may have replaced the exchange meanwhile.
            self.session.follow_up.status = format_error(exc.message)
            return

        if self._is_stale(generation, self._follow_up_generation):
            logger.info("Dropping stale follow-up answer (generation %d)", generation)
            return
        self.session.follow_up.answer = response.answer
        self.session.follow_up.status = FOLLOW_UP_DONE
