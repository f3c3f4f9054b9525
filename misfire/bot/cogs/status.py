"""
misfire.bot.cogs.status — /misfire status Debug Dump
=====================================================

Prints the membership store's tables.  The full dump always goes to the
log; the ephemeral reply is cut to fit Discord's message limit.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord
from discord import app_commands
from discord.ext import commands

from misfire.constants import fit_to_limit

if TYPE_CHECKING:
    from misfire.bot.core import MisfireBot

logger = logging.getLogger(__name__)


class Status(commands.GroupCog, group_name="misfire", group_description="Misfire bot commands."):
    """Operator diagnostics."""

    def __init__(self, bot: MisfireBot) -> None:
        self.bot = bot

    def render(self) -> tuple[str, bool]:
        """Dump the store, log it, and fit it to the configured limit."""
        dump = self.bot.store.dump()
        logger.info("Status dump:\n%s", dump)
        return fit_to_limit(dump, self.bot.cfg.status_char_limit)

    @app_commands.command(name="status", description="Print the inner state. For debugging.")
    async def status(self, interaction: discord.Interaction) -> None:
        text, truncated = self.render()
        if truncated:
            logger.info("Status dump truncated to %d characters", len(text))
        try:
            await interaction.response.send_message(text, ephemeral=True)
        except discord.HTTPException as exc:
            logger.warning("Failed to post a status: %s", exc)


async def setup(bot: MisfireBot) -> None:
    await bot.add_cog(Status(bot))
