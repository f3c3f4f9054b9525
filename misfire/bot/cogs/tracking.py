"""
misfire.bot.cogs.tracking — Channel & Voice-State Listeners
============================================================

Keeps the membership store in step with the guild between resyncs:

- channel create / rename / delete → channel-name table
- voice join / move / leave        → voice-presence table

Each listener converts the discord.py payload into a lifecycle event and
hands it to ``bot.apply``.  Anything that goes wrong is logged and the
event dropped; the store is only ever touched through ``apply``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord
from discord.ext import commands

from misfire.engine.lifecycle import (
    ChannelDeleted,
    ChannelObserved,
    GatewayEvent,
    VoiceJoined,
    VoiceLeft,
)

if TYPE_CHECKING:
    from misfire.bot.core import MisfireBot

logger = logging.getLogger(__name__)


def voice_event(member: discord.Member, after: discord.VoiceState) -> GatewayEvent:
    """Join/move when *after* has a channel, leave otherwise."""
    if after.channel is not None:
        return VoiceJoined(member.id, member.guild.id, after.channel.id)
    return VoiceLeft(member.id)


class Tracking(commands.Cog, name="Tracking"):
    """Mirrors channel names and voice presence into the store."""

    def __init__(self, bot: MisfireBot) -> None:
        self.bot = bot

    def _apply(self, event: GatewayEvent) -> None:
        try:
            self.bot.apply(event)
        except Exception:
            logger.exception("Error applying %s", event)

    # -------------------------------------------------------------------
    # Channels
    # -------------------------------------------------------------------
    @commands.Cog.listener()
    async def on_guild_channel_create(self, channel: discord.abc.GuildChannel) -> None:
        logger.debug("Gateway event: CHANNEL_CREATE #%s (%s)", channel.name, channel.id)
        self._apply(ChannelObserved(channel.guild.id, channel.id, channel.name))

    @commands.Cog.listener()
    async def on_guild_channel_update(
        self,
        before: discord.abc.GuildChannel,
        after: discord.abc.GuildChannel,
    ) -> None:
        if before.name != after.name:
            logger.debug(
                "Gateway event: CHANNEL_UPDATE %s renamed #%s → #%s",
                after.id, before.name, after.name,
            )
        self._apply(ChannelObserved(after.guild.id, after.id, after.name))

    @commands.Cog.listener()
    async def on_guild_channel_delete(self, channel: discord.abc.GuildChannel) -> None:
        logger.debug("Gateway event: CHANNEL_DELETE #%s (%s)", channel.name, channel.id)
        self._apply(ChannelDeleted(channel.guild.id, channel.id))

    # -------------------------------------------------------------------
    # Voice
    # -------------------------------------------------------------------
    @commands.Cog.listener()
    async def on_voice_state_update(
        self,
        member: discord.Member,
        before: discord.VoiceState,
        after: discord.VoiceState,
    ) -> None:
        """Track voice join/move/leave.  Mute/deafen changes re-upsert harmlessly."""
        logger.debug(
            "Gateway event: VOICE_STATE %s (%s → %s)",
            member.name,
            getattr(before.channel, "name", "None"),
            getattr(after.channel, "name", "None"),
        )
        self._apply(voice_event(member, after))


async def setup(bot: MisfireBot) -> None:
    await bot.add_cog(Tracking(bot))
