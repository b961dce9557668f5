"""Tests for AIClient: request shape and reply extraction against a fake OpenAI client."""

from echobot.config import settings
from echobot.services.ai import SYSTEM_PROMPT, AIClient, build_ai_client

from tests.mock_ai import FakeOpenAI


async def test_generate_reply_sends_system_and_user_messages():
    openai = FakeOpenAI("  Hi there!  ")
    ai = AIClient(openai, "test-model")

    reply = await ai.generate_reply(" hello ", user_name="sam")

    assert reply == "Hi there!"
    call = openai.completions.calls[0]
    assert call["model"] == "test-model"
    assert call["messages"] == [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": "sam says: hello"},
    ]


async def test_generate_reply_without_choices_is_empty():
    ai = AIClient(FakeOpenAI(None), "test-model")

    assert await ai.generate_reply("hello") == ""


async def test_close_closes_underlying_client():
    openai = FakeOpenAI()
    ai = AIClient(openai, "test-model")

    await ai.close()

    assert openai.closed is True


def test_build_ai_client_disabled_without_key(monkeypatch):
    monkeypatch.setattr(settings, "openai_api_key", "")

    assert build_ai_client() is None


def test_build_ai_client_with_key(monkeypatch):
    monkeypatch.setattr(settings, "openai_api_key", "sk-test-fake-key")
    monkeypatch.setattr(settings, "openai_model", "test-model")

    ai = build_ai_client()

    assert isinstance(ai, AIClient)
    assert ai.model == "test-model"
