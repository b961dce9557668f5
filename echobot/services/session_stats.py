from __future__ import annotations

import math
from typing import Any, Optional

# NOTE:
# Keep this module dependency-light (no discord import).
# Both the HTTP routes and the slash commands read bot state through here,
# so "bot not connected yet" and "no bot at all" degrade the same way.


def guild_count(client: Any) -> int:
    """
    Number of guilds in the session's cache.

    Returns 0 when the client is None, has no `guilds`, or `guilds` is not sized.
    """
    if client is None:
        return 0
    try:
        guilds = getattr(client, "guilds", None)
    except Exception:
        return 0
    if guilds is None:
        return 0
    try:
        return max(0, int(len(guilds)))
    except (TypeError, ValueError):
        return 0


def is_ready(client: Any) -> bool:
    check = getattr(client, "is_ready", None)
    if not callable(check):
        return False
    try:
        return bool(check())
    except Exception:
        return False


def user_tag(client: Any) -> Optional[str]:
    try:
        user = getattr(client, "user", None)
    except Exception:
        return None
    if user is None:
        return None
    return str(user)


def latency_ms(client: Any) -> Optional[int]:
    """
    Websocket heartbeat latency in whole milliseconds.

    discord.py reports `inf` before the first heartbeat; that maps to None.
    """
    try:
        raw = getattr(client, "latency", None)
    except Exception:
        return None
    if raw is None:
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    if math.isnan(value) or math.isinf(value) or value < 0:
        return None
    return int(round(value * 1000))


__all__ = ["guild_count", "is_ready", "user_tag", "latency_ms"]
