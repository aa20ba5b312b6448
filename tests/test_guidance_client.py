"""Tests for GuidanceClient request building and failure normalization.

Run with:  python -m pytest tests/test_guidance_client.py -v
"""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from wellness.core.guidance_client import GuidanceClient, GuidanceServiceError

BASE_URL = "http://guidance.test/api"


def _client(handler) -> GuidanceClient:
    return GuidanceClient(base_url=BASE_URL, transport=httpx.MockTransport(handler))


def _recording_handler(seen: list[httpx.Request], status_code: int = 200, **kwargs):
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(status_code, **kwargs)

    return handler


# ── Request shape ────────────────────────────────────────────────────────
def test_combined_guidance_posts_to_health_assist():
    seen: list[httpx.Request] = []
    client = _client(_recording_handler(seen, json={
        "recommendations": ["drink water"],
        "synthesized_guidance": "Rest and hydrate.",
        "symptom_analysis": "mild",
        "extra_field": 1,
    }))

    result = asyncio.run(client.request_combined_guidance("headache", "", "u1"))

    assert len(seen) == 1
    assert seen[0].method == "POST"
    assert str(seen[0].url) == f"{BASE_URL}/health-assist"
    assert json.loads(seen[0].content) == {
        "symptoms": "headache", "medical_report": "", "user_id": "u1",
    }
    assert result.recommendations == ["drink water"]
    assert result.summary == "Rest and hydrate."
    assert result.symptom_analysis == "mild"
    assert result.fitness == ""


def test_recommendations_only_posts_to_recommendations():
    seen: list[httpx.Request] = []
    client = _client(_recording_handler(seen, json={"recommendations": ["walk"]}))

    result = asyncio.run(client.request_recommendations_only("cough", "x-ray clear", "u2"))

    assert str(seen[0].url) == f"{BASE_URL}/recommendations"
    assert json.loads(seen[0].content)["medical_report"] == "x-ray clear"
    assert result.recommendations == ["walk"]


def test_follow_up_posts_user_id_and_question():
    seen: list[httpx.Request] = []
    client = _client(_recording_handler(seen, json={"answer": "Yes."}))

    result = asyncio.run(client.request_follow_up_answer("u3", "Can I work?"))

    assert str(seen[0].url) == f"{BASE_URL}/follow-up"
    assert json.loads(seen[0].content) == {"user_id": "u3", "question": "Can I work?"}
    assert result.answer == "Yes."


def test_trailing_slash_in_base_url_is_ignored():
    seen: list[httpx.Request] = []
    client = GuidanceClient(
        base_url=BASE_URL + "/",
        transport=httpx.MockTransport(_recording_handler(seen, json={})),
    )
    asyncio.run(client.request_follow_up_answer("u", "q"))
    assert str(seen[0].url) == f"{BASE_URL}/follow-up"


@pytest.mark.parametrize("body", [{}, {"answer": None}])
def test_missing_fields_are_not_errors(body):
    client = _client(lambda request: httpx.Response(200, json=body))
    assert asyncio.run(client.request_follow_up_answer("u", "q")).answer == ""


# ── Failures ─────────────────────────────────────────────────────────────
def test_error_field_in_failure_body_is_used():
    client = _client(lambda request: httpx.Response(429, json={"error": "rate limited"}))

    with pytest.raises(GuidanceServiceError) as excinfo:
        asyncio.run(client.request_follow_up_answer("u", "q"))

    assert excinfo.value.message == "rate limited"
    assert excinfo.value.status_code == 429


@pytest.mark.parametrize("kwargs", [
    {"json": {"detail": "nope"}},
    {"json": {"error": ""}},
    {"json": ["error"]},
    {"text": "<html>Bad gateway</html>"},
])
def test_failure_without_error_field_falls_back(kwargs):
    client = _client(lambda request: httpx.Response(502, **kwargs))

    with pytest.raises(GuidanceServiceError) as excinfo:
        asyncio.run(client.request_recommendations_only("s", "", "u"))

    assert excinfo.value.message == "Request failed with status code 502"


def test_connection_failure_is_normalized():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    with pytest.raises(GuidanceServiceError) as excinfo:
        asyncio.run(_client(handler).request_combined_guidance("s", "", "u"))

    assert excinfo.value.message == "Connection refused"
    assert excinfo.value.status_code is None


@pytest.mark.parametrize("base_url", ["http://guidance.test:notaport", "http://[::1"])
def test_invalid_base_url_is_normalized(base_url):
    client = GuidanceClient(base_url=base_url)

    with pytest.raises(GuidanceServiceError) as excinfo:
        asyncio.run(client.request_combined_guidance("s", "", "u"))

    assert excinfo.value.message
    assert excinfo.value.status_code is None


def test_invalid_url_from_transport_is_normalized():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.InvalidURL("Invalid port: 'x'")

    with pytest.raises(GuidanceServiceError) as excinfo:
        asyncio.run(_client(handler).request_follow_up_answer("u", "q"))

    assert excinfo.value.message == "Invalid port: 'x'"


@pytest.mark.parametrize("kwargs", [
    {"text": "not json"},
    {"json": ["a", "list"]},
    {"json": {"recommendations": "drink water"}},
])
def test_malformed_success_body_is_an_error(kwargs):
    client = _client(lambda request: httpx.Response(200, **kwargs))

    with pytest.raises(GuidanceServiceError) as excinfo:
        asyncio.run(client.request_combined_guidance("s", "", "u"))

    assert excinfo.value.message == "Malformed response from guidance service."
