"""
Discord integration package.

- echobot.discord.bot is the stable entrypoint (EchoBot + run_bot).
- Slash commands are split into echobot.discord.commands.*.
"""

from .bot import EchoBot, run_bot, serve

__all__ = [
    "EchoBot",
    "run_bot",
    "serve",
]
