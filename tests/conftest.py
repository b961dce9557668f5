"""Root conftest: shared test configuration."""

import os

# Ensure tests don't accidentally use real credentials or a developer .env
os.environ.setdefault("DISCORD_TOKEN", "test-fake-discord-token")
os.environ["OPENAI_API_KEY"] = ""
os.environ["DISCORD_COMMANDS_ALLOW"] = ""
os.environ["DISCORD_COMMANDS_DENY"] = ""
