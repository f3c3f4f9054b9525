"""
misfire.bot.__main__ — Entry point for ``python -m misfire.bot``
================================================================

Wiring:
1. Load .env (secrets).
2. Load config.yaml (soft settings).
3. Configure logging (console or journald style).
4. Create the MisfireBot (it owns a fresh MembershipStore).
5. Start the bot (blocks in the asyncio event loop).

Run with::

    python -m misfire.bot
"""

from __future__ import annotations

import logging
import os
import sys

from dotenv import load_dotenv

from misfire.bot.core import MisfireBot
from misfire.config import load_config
from misfire.logs import configure_logging

logger = logging.getLogger("misfire")


def main() -> None:
    """Bootstrap and run the Misfire bot."""

    # 1. Environment variables (secrets).
    load_dotenv()

    # 2. Soft configuration.
    cfg = load_config(os.getenv("MISFIRE_CONFIG", "config.yaml"))

    # 3. Logging.
    configure_logging(cfg.log_format, cfg.log_level)
    logger.info("Config loaded (log_format=%s, log_level=%s)", cfg.log_format, cfg.log_level)

    token = os.getenv("DISCORD_TOKEN")
    if not token or token == "your-discord-bot-token-here":
        logger.critical(
            "DISCORD_TOKEN is not set.  "
            "Copy .env.example → .env and paste your bot token."
        )
        sys.exit(1)

    # 4. Bot.
    bot = MisfireBot(cfg=cfg)

    # 5. Run (blocks until Ctrl+C or SIGTERM).
    logger.info("Starting Misfire bot…")
    try:
        bot.run(token, log_handler=None)
    except KeyboardInterrupt:
        logger.info("Shutting down gracefully…")


if __name__ == "__main__":
    main()
