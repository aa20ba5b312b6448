"""
Terminal presentation layer for the wellness session controller.

Run with:  python -m wellness.cli --user-id alice
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path

from dotenv import load_dotenv

# Resolve .env relative to project root (parent of wellness/)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=True)

from wellness.config import settings
from wellness.core.guidance_client import GuidanceClient
from wellness.core.session_controller import SessionController
from wellness.models.session import Mode
from wellness.models.view_model import ViewModel
from wellness.prompts.status import MODE_LABELS

logger = logging.getLogger(__name__)

LOGOUT_COMMAND = "logout"


def render_view(view: ViewModel) -> str:
    """Render a ViewModel as plain text."""
    lines = [f"Logged in as {view.user_id}"]
    if view.status:
        lines.append(f"[{view.status}]")

    if view.results is not None:
        lines.append("")
        lines.append("== Your Personalized Guidance ==")
        if view.results.recommendations:
            lines.append("Key Recommendations:")
            lines.extend(f"  - {r}" for r in view.results.recommendations)
        if view.results.summary:
            lines.append("Detailed Summary:")
            lines.append(view.results.summary)
        if view.results.placeholder:
            lines.append(view.results.placeholder)

    if view.agents is not None:
        lines.append("")
        lines.append("== Agent Communication ==")
        for section in view.agents.sections:
            lines.append(f"-- {section.title} --")
            lines.append(section.body)

    if view.follow_up is not None:
        if view.follow_up.status:
            lines.append(f"[{view.follow_up.status}]")
        if view.follow_up.answer:
            lines.append("== Follow-Up Answer ==")
            lines.append(view.follow_up.answer)
    return "\n".join(lines)


def parse_mode(text: str, current: Mode) -> Mode:
    """Read a mode choice; blank or unknown input keeps ``current``."""
    choice = text.strip().lower()
    if not choice:
        return current
    try:
        return Mode(choice)
    except ValueError:
        print(f"Unknown output type {choice!r}; keeping {current.value!r}.")
        return current


def _ask_mode(controller: SessionController) -> None:
    current = controller.session.mode
    options = ", ".join(f"{m.value} = {MODE_LABELS[m.value]}" for m in Mode)
    print(f"Output type ({options})")
    controller.set_mode(parse_mode(input(f"Output type [{current.value}]> "), current))


async def _ask_follow_ups(controller: SessionController) -> bool:
    """Prompt for follow-up questions; return True if the user logged out."""
    while controller.view_model().follow_up is not None:
        question = input("Follow-up (blank for a new request)> ").strip()
        if not question:
            return False
        if question.lower() == LOGOUT_COMMAND:
            return True
        controller.set_follow_up_question(question)
        await controller.submit_follow_up()
        print(render_view(controller.view_model()))
    return False


async def run(controller: SessionController) -> None:
    """Drive one session from the terminal until the user logs out."""
    print(f"Type '{LOGOUT_COMMAND}' at any prompt to end the session.")
    while True:
        symptoms = input("Symptoms> ").strip()
        if symptoms.lower() == LOGOUT_COMMAND:
            break
        controller.set_symptoms(symptoms)
        controller.set_medical_report(input("Medical report (optional)> ").strip())
        _ask_mode(controller)
        await controller.submit_guidance_request()
        print(render_view(controller.view_model()))
        if await _ask_follow_ups(controller):
            break
    controller.logout()


def main() -> None:
    parser = argparse.ArgumentParser(description="Arogya wellness assistant CLI")
    parser.add_argument("--user-id", default=settings.STUB_USER_ID, help="User ID")
    parser.add_argument("--base-url", default=settings.API_BASE_URL, help="Guidance service URL")
    parser.add_argument(
        "--mode",
        choices=[m.value for m in Mode],
        default=Mode.FULL.value,
        help="Initial output type; it can be changed before each request",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    controller = SessionController(
        args.user_id,
        on_logout=lambda: print("Logged out."),
        client=GuidanceClient(base_url=args.base_url),
    )
    controller.set_mode(args.mode)
    try:
        asyncio.run(run(controller))
    except (EOFError, KeyboardInterrupt):
        logger.info("Session ended without logout")


if __name__ == "__main__":
    main()
