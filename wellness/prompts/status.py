"""
Status Messages

User-facing progress, validation and error strings shown by the session
controller, plus the static labels used by the view model.
"""


# ---------------------------------------------------------------------------
# Primary guidance request
# ---------------------------------------------------------------------------
SYMPTOMS_REQUIRED = "Please enter symptoms."
GUIDANCE_PROCESSING = "Processing your request..."
GUIDANCE_DONE = "Guidance generated."


# ---------------------------------------------------------------------------
# Follow-up exchange
# ---------------------------------------------------------------------------
QUESTION_REQUIRED = "Please enter a follow-up question."
FOLLOW_UP_THINKING = "Thinking..."
FOLLOW_UP_DONE = "Answer generated."


# ---------------------------------------------------------------------------
# View model labels
# ---------------------------------------------------------------------------
RESULTS_PLACEHOLDER = "Submit your symptoms to see a tailored wellness plan here."

AGENT_SECTION_TITLES: dict[str, str] = {
    "symptom_analysis": "Symptom Agent",
    "lifestyle": "Lifestyle Agent",
    "diet": "Diet Agent",
    "fitness": "Fitness Agent",
}

MODE_LABELS: dict[str, str] = {
    "full": "Full wellness plan",
    "reco": "Recommendations only",
    "agents": "Can you show this agent communication?",
}


def format_error(message: str) -> str:
    """Format a failure message for display in a status line."""
    return f"Error: {message}"
