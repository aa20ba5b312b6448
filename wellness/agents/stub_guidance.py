"""
Stub Guidance Workflow

Deterministic stand-in for the remote multi-agent guidance backend:
  symptom_agent -> lifestyle_agent -> diet_agent -> fitness_agent -> synthesize

Each agent is a keyword rule over the symptoms and report text, so local
development and end-to-end tests get stable, realistic-looking output
without any model calls.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

logger = logging.getLogger(__name__)

# keyword -> (symptom note, recommendation)
_SYMPTOM_RULES: dict[str, tuple[str, str]] = {
    "headache": (
        "Headache reported; commonly linked to dehydration, poor sleep or screen strain.",
        "Drink water regularly through the day.",
    ),
    "fever": (
        "Fever reported; monitor temperature twice daily.",
        "Rest and see a doctor if the fever lasts more than three days.",
    ),
    "cough": (
        "Cough reported; note whether it is dry or productive.",
        "Try warm fluids and avoid smoke or dust.",
    ),
    "chest pain": (
        "Chest pain reported; this needs prompt medical review.",
        "Seek medical attention promptly for chest pain.",
    ),
    "fatigue": (
        "Fatigue reported; review sleep duration and iron intake.",
        "Keep a regular sleep schedule of 7 to 9 hours.",
    ),
}

_DEFAULT_RECOMMENDATION = "Track your symptoms daily and consult a doctor if they worsen."

DISCLAIMER = "This guidance is informational and does not replace a medical consultation."


def _symptom_agent(symptoms: str, medical_report: str) -> tuple[str, list[str]]:
    text = f"{symptoms} {medical_report}".lower()
    notes: list[str] = []
    recommendations: list[str] = []
    for keyword, (note, recommendation) in _SYMPTOM_RULES.items():
        if keyword in text:
            notes.append(note)
            recommendations.append(recommendation)
    if not notes:
        notes.append("No specific pattern matched; symptoms appear non-specific.")
        recommendations.append(_DEFAULT_RECOMMENDATION)
    if medical_report.strip():
        notes.append("Medical report provided and taken into account.")
    return " ".join(notes), recommendations


def _lifestyle_agent(symptoms: str) -> str:
    if "stress" in symptoms.lower():
        return "Reduce stressors where possible; short breaks and breathing exercises help."
    return "Maintain regular sleep and limit screen time before bed."


def _diet_agent(symptoms: str) -> str:
    if "stomach" in symptoms.lower() or "nausea" in symptoms.lower():
        return "Prefer light, bland meals and small portions until symptoms settle."
    return "Eat balanced meals with fruit, vegetables and enough fluids."


def _fitness_agent(symptoms: str) -> str:
    lowered = symptoms.lower()
    if "chest pain" in lowered or "fever" in lowered:
        return "Avoid strenuous exercise until you have been reviewed."
    return "Light activity such as a 20-minute walk is fine if you feel up to it."


def run_guidance(symptoms: str, medical_report: str = "") -> dict[str, Any]:
    """Run every stub agent and synthesize a combined response body.

    Returns:
        A dict shaped like the /health-assist response.
    """
    symptom_analysis, recommendations = _symptom_agent(symptoms, medical_report)
    lifestyle = _lifestyle_agent(symptoms)
    diet = _diet_agent(symptoms)
    fitness = _fitness_agent(symptoms)

    synthesized = "\n\n".join([
        "## Your wellness plan",
        f"**Symptoms:** {symptom_analysis}",
        f"**Lifestyle:** {lifestyle}",
        f"**Diet:** {diet}",
        f"**Activity:** {fitness}",
        f"_{DISCLAIMER}_",
    ])
    logger.info("run_guidance: %d recommendations", len(recommendations))

    return {
        "recommendations": recommendations,
        "synthesized_guidance": synthesized,
        "symptom_analysis": symptom_analysis,
        "lifestyle": lifestyle,
        "diet": diet,
        "fitness": fitness,
    }


def answer_follow_up(
    guidance: dict[str, Any],
    question: str,
    previous_turns: Optional[list[dict[str, str]]] = None,
) -> str:
    """Answer a follow-up question from previously generated guidance.

    Earlier questions about the same guidance are listed so the answer
    reads as a continuation of the exchange.
    """
    recommendations = guidance.get("recommendations", [])
    lines = [f"You asked: *{question.strip()}*", ""]
    if previous_turns:
        lines.append("Earlier you asked:")
        lines.extend(f"- {turn['question']}" for turn in previous_turns)
        lines.append("")
    if recommendations:
        lines.append("Based on your plan, the key points still apply:")
        lines.extend(f"- {r}" for r in recommendations)
    lines.append("")
    lines.append(DISCLAIMER)
    return "\n".join(lines)

