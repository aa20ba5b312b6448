"""
View Model

Pure projection of a Session into render-ready state for a presentation
layer.  Rich text (summary, agent notes, follow-up answer) goes through a
caller-supplied markdown renderer; the default passes text through.

The results projection is picked per mode from _RESULTS_PROJECTORS so that
a field only ever carries one meaning for a given mode.
"""

from __future__ import annotations

from typing import Callable, Optional

from pydantic import BaseModel

from wellness.models.session import Mode, Session
from wellness.prompts.status import (
    AGENT_SECTION_TITLES,
    MODE_LABELS,
    RESULTS_PLACEHOLDER,
)

MarkdownRenderer = Callable[[str], str]


def _plain_text(text: str) -> str:
    return text


class ResultsPanel(BaseModel):
    """Primary results: recommendation list and detailed summary."""

    recommendations: list[str] = []
    summary: str = ""
    placeholder: str = ""


class AgentSection(BaseModel):
    title: str
    body: str


class AgentPanel(BaseModel):
    """Per-agent transcript, shown after an agent-view submission."""

    sections: list[AgentSection]


class FollowUpPanel(BaseModel):
    question: str
    status: str = ""
    answer: str = ""


class ViewModel(BaseModel):
    """Everything a presentation layer needs to draw the page.

    A panel is ``None`` when it is hidden.
    """

    user_id: str
    mode: Mode
    mode_labels: dict[str, str]
    status: str = ""
    results: Optional[ResultsPanel] = None
    agents: Optional[AgentPanel] = None
    follow_up: Optional[FollowUpPanel] = None


# ---------------------------------------------------------------------------
# Results projection per mode
# ---------------------------------------------------------------------------

def _project_results(session: Session, render: MarkdownRenderer) -> ResultsPanel:
    summary = render(session.summary) if session.summary else ""
    placeholder = "" if session.has_guidance else RESULTS_PLACEHOLDER
    return ResultsPanel(
        recommendations=list(session.recommendations),
        summary=summary,
        placeholder=placeholder,
    )


def _project_no_results(session: Session, render: MarkdownRenderer) -> None:
    return None


_RESULTS_PROJECTORS: dict[
    Mode, Callable[[Session, MarkdownRenderer], Optional[ResultsPanel]]
] = {
    Mode.FULL: _project_results,
    Mode.RECOMMENDATIONS_ONLY: _project_results,
    Mode.AGENT_VIEW: _project_no_results,
}


def _project_agents(session: Session, render: MarkdownRenderer) -> Optional[AgentPanel]:
    if not session.show_agent_view:
        return None
    notes = session.agent_notes.model_dump()
    return AgentPanel(
        sections=[
            AgentSection(title=title, body=render(notes[field]))
            for field, title in AGENT_SECTION_TITLES.items()
        ]
    )


def _project_follow_up(session: Session, render: MarkdownRenderer) -> Optional[FollowUpPanel]:
    if not session.has_guidance:
        return None
    follow_up = session.follow_up
    return FollowUpPanel(
        question=follow_up.question,
        status=follow_up.status,
        answer=render(follow_up.answer) if follow_up.answer else "",
    )


def build_view_model(
    session: Session, render_markdown: Optional[MarkdownRenderer] = None
) -> ViewModel:
    """Project ``session`` into a ViewModel.

    Args:
        session: The session to display.
        render_markdown: Converts markdown text into the presentation
            layer's rich-text form.  Defaults to identity.

    Returns:
        A ViewModel with hidden panels set to None.
    """
    render = render_markdown or _plain_text
    return ViewModel(
        user_id=session.user_id,
        mode=session.mode,
        mode_labels=dict(MODE_LABELS),
        status=session.status,
        results=_RESULTS_PROJECTORS[session.mode](session, render),
        agents=_project_agents(session, render),
        follow_up=_project_follow_up(session, render),
    )
