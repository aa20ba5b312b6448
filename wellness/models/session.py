"""
Session Model

The single mutable entity behind one wellness-guidance interaction.
Owned by the SessionController for the page's lifetime.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class Mode(str, Enum):
    """Output mode selecting the backend operation and the result projection."""

    FULL = "full"
    RECOMMENDATIONS_ONLY = "reco"
    AGENT_VIEW = "agents"

    @property
    def uses_combined_guidance(self) -> bool:
        """True when this mode is served by /health-assist."""
        return self in (Mode.FULL, Mode.AGENT_VIEW)


class AgentNotes(BaseModel):
    """Raw per-agent output from the combined guidance operation."""

    symptom_analysis: str = ""
    lifestyle: str = ""
    diet: str = ""
    fitness: str = ""


class FollowUpExchange(BaseModel):
    """Secondary question/answer exchange scoped to the same session."""

    question: str = ""
    status: str = ""
    answer: str = ""


class Session(BaseModel):
    """All state for one guidance interaction."""

    user_id: str = Field(frozen=True)
    symptoms: str = ""
    medical_report: str = ""
    mode: Mode = Mode.FULL
    status: str = ""
    recommendations: list[str] = Field(default_factory=list)
    summary: str = ""
    agent_notes: AgentNotes = Field(default_factory=AgentNotes)
    show_agent_view: bool = False
    follow_up: FollowUpExchange = Field(default_factory=FollowUpExchange)

    @property
    def has_guidance(self) -> bool:
        """True when some guidance exists to ask a follow-up about."""
        return bool(self.summary) or len(self.recommendations) > 0

    def reset_for_guidance_request(self, status: str) -> None:
        """Clear every result field ahead of a new primary submission.

        Input fields (symptoms, report, mode) are kept.  The follow-up
        exchange is cleared entirely, including the question.
        """
        self.status = status
        self.recommendations = []
        self.summary = ""
        self.follow_up = FollowUpExchange()
        self.show_agent_view = False
        self.agent_notes = AgentNotes()
