from __future__ import annotations

import logging
from typing import Any, Optional

import discord
from discord import app_commands

from .shared import truncate

logger = logging.getLogger(__name__)

AI_DISABLED = "🤖 AI replies are not configured on this bot."
AI_FAILED = "⚠️ I couldn't come up with a reply right now. Please try again in a moment."
EMPTY_REPLY = "🤔 I don't have anything to say to that."


async def chat_reply(ai: Any, prompt: str, user_name: Optional[str] = None) -> str:
    """
    Produce the message to send for a /chat prompt.

    Never raises: AI failures become a friendly message and are logged.
    """
    if ai is None:
        return AI_DISABLED
    try:
        text = await ai.generate_reply(prompt, user_name=user_name)
    except Exception:
        logger.exception("AI reply failed")
        return AI_FAILED
    return truncate(text) if text else EMPTY_REPLY


def register(bot: "discord.Client", tree: app_commands.CommandTree) -> None:
    """
    /chat prompt: ask Echo something.

    Uses bot.ai (set up in EchoBot.setup_hook); disabled when no AI key is configured.
    """

    @tree.command(name="chat", description="Chat with Echo.")
    @app_commands.describe(prompt="What do you want to say?")
    async def chat(interaction: discord.Interaction, prompt: app_commands.Range[str, 1, 1500]) -> None:
        ai = getattr(bot, "ai", None)
        if ai is None:
            await interaction.response.send_message(AI_DISABLED, ephemeral=True)
            return

        await interaction.response.defer(thinking=True)
        reply = await chat_reply(ai, prompt, user_name=interaction.user.display_name)
        await interaction.followup.send(reply)
