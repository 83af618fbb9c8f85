"""Tests for the language-model augmentation backends."""

import json

import httpx
import pytest

from memosync.ai.service import (
    GEMINI_MODELS,
    ClaudeService,
    GeminiService,
    OllamaService,
    OpenAIService,
    create_ai_service,
    create_dummy_ai_service,
)


def _gemini(handler) -> GeminiService:
    return GeminiService("g-key", "gemini-1.5-flash", transport=httpx.MockTransport(handler))


def _reply(text: str) -> httpx.Response:
    return httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": text}]}}]})


# ============================================================================
# Factory
# ============================================================================


@pytest.mark.parametrize(
    ("model_type", "cls"),
    [("gemini", GeminiService), ("openai", OpenAIService), ("claude", ClaudeService), ("ollama", OllamaService)],
)
def test_factory_selects_backend(model_type, cls):
    service = create_ai_service(model_type, "key", "model-x")
    assert isinstance(service, cls)
    assert service.model_name == "model-x"


def test_factory_rejects_unknown_backend():
    with pytest.raises(ValueError, match="Unsupported AI model type"):
        create_ai_service("mystery", "key", "m")


def test_gemini_model_catalog():
    assert "gemini-1.5-flash" in {m.name for m in GEMINI_MODELS}


@pytest.mark.asyncio
@pytest.mark.parametrize("model_type", ["openai", "claude", "ollama"])
async def test_unimplemented_backends_return_empty(model_type):
    service = create_ai_service(model_type, "key", "m")
    assert await service.generate_summary("text", "English") == ""
    assert await service.generate_tags("text") == []
    assert await service.generate_weekly_digest(["a", "b"]) == ""


@pytest.mark.asyncio
async def test_dummy_service_returns_empty():
    service = create_dummy_ai_service()
    assert await service.generate_summary("text", "English") == ""
    assert await service.generate_tags("text") == []
    assert await service.generate_weekly_digest([]) == ""


# ============================================================================
# Gemini
# ============================================================================


@pytest.mark.asyncio
async def test_gemini_summary_request():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = request.url
        captured["body"] = json.loads(request.read())
        return _reply("A short summary.")

    summary = await _gemini(handler).generate_summary("Long note", "French")

    assert summary == "A short summary."
    assert captured["url"].path == "/v1beta/models/gemini-1.5-flash:generateContent"
    assert captured["url"].params["key"] == "g-key"
    prompt = captured["body"]["contents"][0]["parts"][0]["text"]
    assert "French" in prompt and "Long note" in prompt


@pytest.mark.asyncio
async def test_gemini_tags_are_split_and_cleaned():
    service = _gemini(lambda request: _reply("python, #asyncio , ,sync"))
    assert await service.generate_tags("note") == ["python", "asyncio", "sync"]


@pytest.mark.asyncio
async def test_gemini_digest_joins_notes():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["prompt"] = json.loads(request.read())["contents"][0]["parts"][0]["text"]
        return _reply("## Week\n- done")

    digest = await _gemini(handler).generate_weekly_digest(["monday note", "friday note"])

    assert digest == "## Week\n- done"
    assert "monday note\n---\nfriday note" in captured["prompt"]


@pytest.mark.asyncio
async def test_gemini_failures_degrade_to_empty():
    service = _gemini(lambda request: httpx.Response(500, text="internal"))
    assert await service.generate_summary("x", "English") == ""
    assert await service.generate_tags("x") == []
    assert await service.generate_weekly_digest(["x"]) == ""


@pytest.mark.asyncio
async def test_gemini_without_key_makes_no_request():
    calls = []
    service = GeminiService("", transport=httpx.MockTransport(lambda r: calls.append(r) or _reply("x")))
    assert await service.generate_summary("x", "English") == ""
    assert calls == []


@pytest.mark.asyncio
async def test_gemini_empty_candidates():
    service = _gemini(lambda request: httpx.Response(200, json={"candidates": []}))
    assert await service.generate_summary("x", "English") == ""
