"""
Bot entrypoint (bot + embedded HTTP API).

Operator notes:
- This file should remain extremely small and boring.
- All configuration validation happens inside run_bot().
- If this file crashes, the error should be immediately obvious to the operator.
"""

import logging
import sys

from echobot.discord.bot import run_bot


def main() -> None:
    try:
        run_bot()
    except KeyboardInterrupt:
        pass
    except Exception:
        logging.basicConfig(level=logging.ERROR)
        logging.exception("Echo bot failed to start.")
        print("\n❌ Echo bot failed to start.")
        print("   See error above. Most common causes:")
        print("   - DISCORD_TOKEN missing or not loaded into the environment")
        print("   - DISCORD_SYNC_GUILD_ONLY=true without DISCORD_GUILD_ID")
        print("   - API port already in use (API_PORT)\n")
        sys.exit(1)


if __name__ == "__main__":
    main()
