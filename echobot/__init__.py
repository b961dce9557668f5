"""Echo: a small Discord bot with an auto-mounted stats API."""

__version__ = "0.1.0"
