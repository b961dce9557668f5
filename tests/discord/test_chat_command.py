"""Tests for /chat: AI reply shaping and the command callback with a mock AI client."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import discord
from discord import app_commands

from echobot.discord.commands import chat as chat_module
from echobot.discord.commands.chat import AI_DISABLED, AI_FAILED, EMPTY_REPLY, chat_reply
from echobot.discord.commands.shared import MESSAGE_LIMIT

from tests.mock_ai import MockAIClient


# -- Helpers -------------------------------------------------------------------


def _chat_callback(ai):
    client = discord.Client(intents=discord.Intents.none())
    client.ai = ai
    tree = app_commands.CommandTree(client)
    chat_module.register(client, tree)
    return tree.get_command("chat").callback


def _interaction():
    interaction = MagicMock()
    interaction.user = SimpleNamespace(display_name="sam")
    interaction.response.send_message = AsyncMock()
    interaction.response.defer = AsyncMock()
    interaction.followup.send = AsyncMock()
    return interaction


# ==============================================================================
# chat_reply
# ==============================================================================


async def test_reply_passes_prompt_and_user():
    ai = MockAIClient(["Hi sam!"])

    reply = await chat_reply(ai, "hello", user_name="sam")

    assert reply == "Hi sam!"
    assert ai.calls == [{"prompt": "hello", "user_name": "sam"}]


async def test_reply_without_ai():
    assert await chat_reply(None, "hello") == AI_DISABLED


async def test_reply_on_ai_error():
    ai = MockAIClient()
    ai.set_error(RuntimeError("rate limited"))

    assert await chat_reply(ai, "hello") == AI_FAILED
    # next call recovers
    assert await chat_reply(ai, "hello") == "Hello from Echo."


async def test_empty_reply():
    assert await chat_reply(MockAIClient([""]), "hello") == EMPTY_REPLY


async def test_long_reply_is_truncated():
    reply = await chat_reply(MockAIClient(["x" * 5000]), "hello")

    assert len(reply) == MESSAGE_LIMIT
    assert reply.endswith("...")


# ==============================================================================
# Command callback
# ==============================================================================


async def test_chat_defers_then_follows_up():
    callback = _chat_callback(MockAIClient(["Hi sam!"]))
    interaction = _interaction()

    await callback(interaction, "hello")

    interaction.response.defer.assert_awaited_once_with(thinking=True)
    interaction.followup.send.assert_awaited_once_with("Hi sam!")


async def test_chat_disabled_without_ai():
    callback = _chat_callback(None)
    interaction = _interaction()

    await callback(interaction, "hello")

    interaction.response.send_message.assert_awaited_once_with(AI_DISABLED, ephemeral=True)
    interaction.response.defer.assert_not_awaited()
