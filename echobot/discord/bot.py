from __future__ import annotations

import asyncio
import logging
from typing import Optional

import discord
from discord import app_commands

from ..config import settings
from ..main import build_server, create_app
from ..services.ai import AIClient, build_ai_client
from ..services.session_stats import guild_count
from .commands import register_all

logger = logging.getLogger(__name__)


class EchoBot(discord.Client):
    """
    Echo Discord bot.

    Notes:
    - Slash commands live in discord/commands/* and register against self.tree.
    - self.ai is the single AI client; None when AI is not configured.
    - The HTTP API gets this object as context["client"]; nothing reads it globally.
    """

    def __init__(self, *, ai: Optional[AIClient] = None) -> None:
        intents = discord.Intents.default()
        intents.guilds = True

        super().__init__(intents=intents)

        self.tree = app_commands.CommandTree(self)
        self.ai: Optional[AIClient] = ai

    async def setup_hook(self) -> None:
        if self.ai is None:
            self.ai = build_ai_client()

        # Register slash commands from modular command files
        register_all(self, self.tree)

        # Sync commands (guild-only optional for fast iteration)
        try:
            guild_id = settings.discord_guild_id
            if guild_id and settings.discord_sync_guild_only:
                guild = discord.Object(id=guild_id)
                self.tree.copy_global_to(guild=guild)
                await self.tree.sync(guild=guild)
                logger.info("Slash commands synced to guild=%s", guild_id)
            else:
                await self.tree.sync()
                logger.info("Slash commands synced globally")
        except discord.HTTPException:
            logger.exception("Slash command sync failed")

    async def close(self) -> None:
        if self.ai is not None:
            try:
                await self.ai.close()
            except Exception:
                logger.warning("AI client close failed", exc_info=True)
            self.ai = None
        await super().close()

    async def on_ready(self) -> None:
        logger.info(
            "EchoBot ready as %s (guilds=%s, guild_sync=%s, ai=%s)",
            str(self.user),
            guild_count(self),
            str(settings.discord_guild_id or "global"),
            "ON" if self.ai is not None else "OFF",
        )
        await self.change_presence(
            activity=discord.CustomActivity(name="Use /chat to start chatting!"),
            status=discord.Status.online,
        )


# ---------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------


async def serve(bot: EchoBot) -> None:
    """
    Run the bot and its HTTP API on the same event loop.
    Whichever stops first shuts the other down.
    """
    server = build_server(create_app({"client": bot}))

    async def _api() -> None:
        try:
            await server.serve()
        finally:
            if not bot.is_closed():
                await bot.close()

    async def _bot() -> None:
        try:
            await bot.start(settings.discord_token)
        finally:
            server.should_exit = True

    logger.info("API listening on %s:%s%s", settings.host, settings.api_port, settings.api_prefix)
    async with bot:
        await asyncio.gather(_bot(), _api())


def run_bot() -> None:
    logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO))
    settings.validate_for_bot()
    asyncio.run(serve(EchoBot()))


if __name__ == "__main__":
    run_bot()
