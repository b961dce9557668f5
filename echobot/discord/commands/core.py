from __future__ import annotations

from typing import TYPE_CHECKING, Any

from discord import app_commands

from ...config import settings
from ...services.session_stats import guild_count, latency_ms

if TYPE_CHECKING:
    import discord


def status_message(bot: Any) -> str:
    latency = latency_ms(bot)
    api = f"{settings.host}:{settings.api_port}{settings.api_prefix}"
    return (
        "✅ Echo is online.\n"
        f"Guilds: {guild_count(bot)}\n"
        f"Latency: {f'{latency} ms' if latency is not None else 'n/a'}\n"
        f"API: {api}"
    )


def register(bot: "discord.Client", tree: app_commands.CommandTree) -> None:
    """
    Core sanity command.

      - /status  bot is alive, guild count, latency
    """

    @tree.command(name="status", description="Sanity check: bot is alive.")
    async def status(interaction: "discord.Interaction") -> None:
        await interaction.response.send_message(status_message(bot), ephemeral=True)
