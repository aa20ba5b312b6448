"""
Guidance Store

Remembers the latest guidance generated for each user so the stub
service's /follow-up endpoint can answer with context recovered from the
user id alone.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

logger = logging.getLogger(__name__)


class GuidanceStore:
    """In-memory store of the latest guidance and follow-up turns per user."""

    def __init__(self) -> None:
        self._guidance: dict[str, dict[str, Any]] = {}
        self._follow_ups: dict[str, list[dict[str, str]]] = {}

    def save_guidance(self, user_id: str, guidance: dict[str, Any]) -> None:
        """Replace the user's latest guidance and drop earlier follow-ups.

        Args:
            user_id: The opaque user identifier.
            guidance: The response body that was sent to the user.
        """
        self._guidance[user_id] = guidance
        self._follow_ups.pop(user_id, None)
        logger.info("Stored guidance for %s", user_id)

    def get_guidance(self, user_id: str) -> Optional[dict[str, Any]]:
        """Return the user's latest guidance, or None if there is none."""
        return self._guidance.get(user_id)

    def append_follow_up(self, user_id: str, question: str, answer: str) -> None:
        self._follow_ups.setdefault(user_id, []).append(
            {"question": question, "answer": answer}
        )

    def get_follow_ups(self, user_id: str) -> list[dict[str, str]]:
        return self._follow_ups.get(user_id, [])

    def clear_all(self) -> None:
        """Forget every user's guidance and follow-ups."""
        self._guidance.clear()
        self._follow_ups.clear()


# Module-level singleton instance
guidance_store = GuidanceStore()
