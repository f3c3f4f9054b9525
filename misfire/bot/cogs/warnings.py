"""
misfire.bot.cogs.warnings — Misfire Warnings
=============================================

Listens for guild messages, asks the classifier whether the author is
posting outside their voice channel's text channel, and if so replies with
a warning carrying two buttons:

- **Dismiss**: anyone may press it; deletes the warning.
- **Purge**: only the warned author may press it; deletes the warning
  *and* the original message.

Pipeline:
1. on_message fires → gate checks (DM, bots, ourselves)
2. ``bot.apply(MessagePosted(...))`` → verdict (read lock released here)
3. Reply with :class:`WarningView` (network I/O, no lock held)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord
from discord.ext import commands

from misfire.constants import DISMISS_BUTTON_ID, PURGE_BUTTON_ID
from misfire.engine.lifecycle import MessagePosted

if TYPE_CHECKING:
    from misfire.bot.core import MisfireBot
    from misfire.config import MisfireConfig

logger = logging.getLogger(__name__)


def is_warned_author(warning: discord.Message, user_id: int) -> bool:
    """True if *user_id* is the person the warning reply pinged."""
    return any(user.id == user_id for user in warning.mentions)


class WarningView(discord.ui.View):
    """Persistent Dismiss / Purge buttons attached to every warning.

    Registered once in ``setup_hook`` so the buttons keep working on
    warnings posted before a restart.
    """

    def __init__(self, cfg: MisfireConfig) -> None:
        super().__init__(timeout=None)
        self.cfg = cfg

        dismiss = discord.ui.Button(
            label=cfg.dismiss_label,
            style=discord.ButtonStyle.secondary,
            custom_id=DISMISS_BUTTON_ID,
        )
        dismiss.callback = self.on_dismiss
        self.add_item(dismiss)

        purge = discord.ui.Button(
            label=cfg.purge_label,
            style=discord.ButtonStyle.danger,
            custom_id=PURGE_BUTTON_ID,
        )
        purge.callback = self.on_purge
        self.add_item(purge)

    async def on_dismiss(self, interaction: discord.Interaction) -> None:
        await interaction.response.defer()
        warning = interaction.message
        if warning is None:
            return
        try:
            await warning.delete()
        except discord.HTTPException as exc:
            logger.warning("Failed to dismiss warning %s: %s", warning.id, exc)

    async def on_purge(self, interaction: discord.Interaction) -> None:
        warning = interaction.message
        if warning is None:
            await interaction.response.defer()
            return

        if not is_warned_author(warning, interaction.user.id):
            try:
                await interaction.response.send_message(self.cfg.purge_denied_text, ephemeral=True)
            except discord.HTTPException as exc:
                logger.warning("Failed to refuse purge for user %s: %s", interaction.user.id, exc)
            return

        await interaction.response.defer()

        ref = warning.reference
        if ref is not None and ref.message_id is not None:
            try:
                await warning.channel.get_partial_message(ref.message_id).delete()
            except discord.NotFound:
                logger.debug("Warned message %s was already deleted", ref.message_id)
            except discord.HTTPException as exc:
                logger.warning("Failed to delete warned message %s: %s", ref.message_id, exc)

        # The warning goes regardless of what happened to the original.
        try:
            await warning.delete()
        except discord.HTTPException as exc:
            logger.warning("Failed to purge warning %s: %s", warning.id, exc)
        else:
            logger.info("User %s purged warned message in #%s", interaction.user.id, warning.channel)


class Warnings(commands.Cog, name="Warnings"):
    """Replies to out-of-VC messages with a dismissible warning."""

    def __init__(self, bot: MisfireBot) -> None:
        self.bot = bot

    @commands.Cog.listener()
    async def on_message(self, message: discord.Message) -> None:
        try:
            await self._handle_message(message)
        except Exception:
            logger.exception(
                "Error processing message %s from user %s",
                message.id,
                message.author.id,
            )

    async def _handle_message(self, message: discord.Message) -> None:
        """Inner message handler (separated for error isolation)."""

        # Gate 1: Ignore DMs
        if message.guild is None:
            return

        # Gate 2: Never warn about our own warnings
        if self.bot.user is not None and message.author.id == self.bot.user.id:
            return

        # Gate 3: Other bots (configurable)
        if self.bot.cfg.ignore_bots and message.author.bot:
            return

        out_of_vc = self.bot.apply(
            MessagePosted(message.author.id, message.guild.id, message.channel.id),
        )
        if not out_of_vc:
            return

        logger.info(
            "Misfire: %s posted in #%s (%s) while in voice",
            message.author.name,
            getattr(message.channel, "name", "unknown"),
            message.channel.id,
        )
        await self.send_warning(message)

    async def send_warning(self, message: discord.Message) -> None:
        cfg = self.bot.cfg
        try:
            await message.reply(
                content=cfg.warning_text,
                view=WarningView(cfg),
                mention_author=True,
                allowed_mentions=discord.AllowedMentions(everyone=False, roles=False, users=True),
            )
        except discord.HTTPException as exc:
            logger.warning("Failed to post a warning for message %s: %s", message.id, exc)


async def setup(bot: MisfireBot) -> None:
    await bot.add_cog(Warnings(bot))
