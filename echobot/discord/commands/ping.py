from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, List, Optional

import discord
from discord import app_commands

from ...config import settings
from .shared import clamp_count, reply_error

logger = logging.getLogger(__name__)

# Discord allows at most 25 choices per option.
_MAX_CHOICES = 25

NO_PERMISSION = 'You need the "Manage Server" permission to run this command.'


def _count_choices() -> List[app_commands.Choice[int]]:
    top = max(1, min(settings.ping_max_count, _MAX_CHOICES))
    return [
        app_commands.Choice(name=f"{n} time" if n == 1 else f"{n} times", value=n)
        for n in range(1, top + 1)
    ]


def can_ping(interaction: Any) -> bool:
    perms = getattr(interaction, "permissions", None)
    return bool(perms is not None and getattr(perms, "manage_guild", False))


async def send_pings(
    channel: Any,
    mention: str,
    count: int,
    delay_s: float,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
) -> int:
    """
    Mention `count` times, waiting `delay_s` before each message.
    Returns how many messages were sent; stops at the first send failure.
    """
    sent = 0
    for _ in range(count):
        await sleep(delay_s)
        try:
            await channel.send(mention)
        except discord.HTTPException:
            logger.warning("ping stopped after %s/%s messages (send failed)", sent, count, exc_info=True)
            break
        sent += 1
    return sent


def register(bot: "discord.Client", tree: app_commands.CommandTree) -> None:
    """
    /ping user [count]: mention a user a limited number of times.

    Permissions:
    - Manage Server (checked at runtime; also the default visibility).
    """

    @tree.command(name="ping", description="Ping a user a limited number of times.")
    @app_commands.describe(user="User to ping", count=f"How many times to ping (max {settings.ping_max_count})")
    @app_commands.choices(count=_count_choices())
    @app_commands.default_permissions(manage_guild=True)
    async def ping(
        interaction: discord.Interaction,
        user: discord.User,
        count: Optional[app_commands.Choice[int]] = None,
    ) -> None:
        if not can_ping(interaction):
            await interaction.response.send_message(NO_PERMISSION, ephemeral=True)
            return

        n, _ = clamp_count(count.value if count is not None else None, settings.ping_max_count)

        try:
            await interaction.response.send_message(f"Okay, I will ping {user.mention} {n} time(s).")

            channel = interaction.channel
            if channel is None:
                return
            await send_pings(channel, user.mention, n, settings.ping_delay_s)
        except Exception:
            logger.exception("/ping failed")
            await reply_error(interaction)
