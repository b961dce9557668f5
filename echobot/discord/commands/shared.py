from __future__ import annotations

import logging
from typing import Any, Tuple

logger = logging.getLogger(__name__)

# NOTE:
# Keep this module dependency-light (no discord import) so helpers are easy to test.

# Discord's hard cap on message content length.
MESSAGE_LIMIT = 2000

GENERIC_ERROR = "❌ There was an error while executing this command."


def truncate(s: str, limit: int = MESSAGE_LIMIT) -> str:
    if not s:
        return ""
    if len(s) <= limit:
        return s
    return s[: max(0, limit - 3)] + "..."


def clamp_count(count: int | None, max_count: int) -> Tuple[int, bool]:
    """
    Clamp a repeat count into 1..max_count.
    Returns (count, was_clamped). None means 1.
    """
    if count is None:
        return 1, False
    if count < 1:
        return 1, True
    if count > max_count:
        return max_count, True
    return count, False


async def reply_error(interaction: Any, content: str = GENERIC_ERROR) -> None:
    """
    Best-effort ephemeral error reply, whether or not the interaction was already answered.
    """
    try:
        if interaction.response.is_done():
            await interaction.followup.send(content, ephemeral=True)
        else:
            await interaction.response.send_message(content, ephemeral=True)
    except Exception:
        logger.exception("Failed to deliver error reply")


__all__ = [
    "MESSAGE_LIMIT",
    "GENERIC_ERROR",
    "truncate",
    "clamp_count",
    "reply_error",
]
