"""
API-only entrypoint.

Operator notes:
- Serves the stats API without a Discord session; stats report their defaults.
- Use run_bot.py for the normal deployment (bot + API in one process).
"""

import logging
import sys

from echobot.main import run


def main() -> None:
    try:
        run()
    except Exception:
        logging.basicConfig(level=logging.ERROR)
        logging.exception("API failed to start.")
        print("\n❌ API failed to start.")
        print("   See error above. Most common causes:")
        print("   - Port already in use (API_PORT)")
        print("   - Missing dependencies / broken venv\n")
        sys.exit(1)


if __name__ == "__main__":
    main()
