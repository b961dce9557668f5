from __future__ import annotations

import importlib
import logging
from typing import TYPE_CHECKING, Dict, Sequence

from ...config import settings
from ...registry import REGISTERED, register_each

if TYPE_CHECKING:
    import discord
    from discord import app_commands

logger = logging.getLogger(__name__)

# Slash command modules in this package, in registration order.
MODULES: Sequence[str] = ("core", "ping", "chat")

# The bot refuses to start without these.
REQUIRED_MODULES: Sequence[str] = ("core", "ping")

SKIPPED = "skipped (allow/deny)"

__all__ = ["register_all", "enabled_modules", "MODULES", "REQUIRED_MODULES"]


def enabled_modules(modules: Sequence[str] = MODULES) -> Sequence[str]:
    """DISCORD_COMMANDS_ALLOW wins over DISCORD_COMMANDS_DENY; neither set means all."""
    if settings.commands_allow is not None:
        return [m for m in modules if m in settings.commands_allow]
    if settings.commands_deny is not None:
        return [m for m in modules if m not in settings.commands_deny]
    return list(modules)


def register_all(
    bot: "discord.Client",
    tree: "app_commands.CommandTree",
    modules: Sequence[str] = MODULES,
    required: Sequence[str] = REQUIRED_MODULES,
) -> Dict[str, str]:
    """
    Import each enabled command module and call its `register(bot, tree)`.

    Modules are isolated from each other like API route modules are. A required
    module that did not register raises RuntimeError so the bot never comes up
    half working; a required module disabled by allow/deny is not an error.
    """

    def _attempt(name: str) -> bool:
        mod = importlib.import_module(f"{__name__}.{name}")
        reg = getattr(mod, "register", None)
        if not callable(reg):
            return False
        reg(bot, tree)
        return True

    enabled = enabled_modules(modules)
    outcome = register_each("discord command module", enabled, _attempt, logger)
    results = {name: outcome.get(name, SKIPPED) for name in modules}

    broken = [f"{name}: {results[name]}" for name in required if results.get(name) not in (REGISTERED, SKIPPED)]
    if broken:
        raise RuntimeError("Required command modules did not register: " + "; ".join(broken))
    return results
