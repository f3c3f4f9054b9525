"""
misfire.bot.core — Bot Instance & Cog Loader
=============================================

**Why this file exists:**
Defines :class:`MisfireBot`, a ``commands.Bot`` subclass that:

1. Owns the one :class:`~misfire.engine.membership.MembershipStore` for
   this connection (``bot.store``) so every Cog reaches it via
   ``self.bot.store``.
2. Loads every Cog in ``misfire/bot/cogs/``.
3. Registers the persistent warning buttons so they keep working after a
   restart.
4. On every ``on_ready`` wipes the store and rebuilds it from the guild
   cache (resync), then syncs the slash-command tree.

Connect-time ordering:
    ``resync()`` runs synchronously at the top of ``on_ready``, before the
    first ``await``.  No message or voice handler can interleave with it.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable

import discord
from discord.ext import commands

from misfire.bot.cogs.warnings import WarningView
from misfire.config import MisfireConfig
from misfire.engine.associations import AssociationRepository, NullAssociationRepository
from misfire.engine.lifecycle import (
    ChannelInfo,
    ChannelObserved,
    GatewayEvent,
    ResyncSnapshot,
    VoiceJoined,
    VoicePresence,
    dispatch,
    resync,
)
from misfire.engine.membership import MembershipStore

logger = logging.getLogger(__name__)

# Cog modules to load on startup.
EXTENSIONS: list[str] = [
    "misfire.bot.cogs.tracking",
    "misfire.bot.cogs.warnings",
    "misfire.bot.cogs.status",
]


# ---------------------------------------------------------------------------
# Guild cache → lifecycle records
# ---------------------------------------------------------------------------
def guild_channels(guild: discord.Guild) -> list[ChannelInfo]:
    """Every channel the bot can see in *guild* (categories included)."""
    return [ChannelInfo(guild.id, ch.id, ch.name) for ch in guild.channels]


def guild_presences(guild: discord.Guild) -> list[VoicePresence]:
    """Everyone currently connected to a voice or stage channel in *guild*."""
    presences: list[VoicePresence] = []
    for vc in [*guild.voice_channels, *guild.stage_channels]:
        for user_id in vc.voice_states:
            presences.append(VoicePresence(user_id, guild.id, vc.id))
    return presences


def build_snapshot(guilds: Iterable[discord.Guild]) -> ResyncSnapshot:
    """Collect a full :class:`ResyncSnapshot` from the guild cache."""
    guilds = list(guilds)
    return ResyncSnapshot(
        channels=tuple(ch for guild in guilds for ch in guild_channels(guild)),
        presences=tuple(p for guild in guilds for p in guild_presences(guild)),
    )


def guild_events(guild: discord.Guild) -> list[GatewayEvent]:
    """Upsert events for one guild that appeared after startup."""
    events: list[GatewayEvent] = [
        ChannelObserved(ch.guild_id, ch.channel_id, ch.name) for ch in guild_channels(guild)
    ]
    events.extend(
        VoiceJoined(p.user_id, p.guild_id, p.channel_id) for p in guild_presences(guild)
    )
    return events


class MisfireBot(commands.Bot):
    """Custom Bot subclass that carries the membership store.

    Parameters
    ----------
    cfg:
        The parsed :class:`MisfireConfig` from ``config.yaml``.
    store:
        Optional pre-built store (tests); a fresh one is created otherwise.
    """

    def __init__(self, cfg: MisfireConfig, store: MembershipStore | None = None) -> None:
        # Default intents cover GUILDS, GUILD_MESSAGES and GUILD_VOICE_STATES.
        # We never read message content, member lists or presences.
        intents = discord.Intents.default()
        intents.message_content = False
        intents.members = False
        intents.presences = False

        super().__init__(
            command_prefix=commands.when_mentioned,
            intents=intents,
            description="Warns when people in a voice call post in the wrong text channel.",
        )

        self.cfg = cfg
        self.store = store if store is not None else MembershipStore()
        self.associations: AssociationRepository | None = (
            NullAssociationRepository() if cfg.associations_enabled else None
        )

    def apply(self, event: GatewayEvent) -> bool | None:
        """Feed one gateway event into the store."""
        return dispatch(self.store, event)

    # -----------------------------------------------------------------------
    # Lifecycle hooks
    # -----------------------------------------------------------------------
    async def setup_hook(self) -> None:
        """Called once before the bot connects to Discord.

        Loads all Cog extensions.  If one fails we log it and keep going;
        the status command shouldn't take down warnings, or vice versa.
        """
        for ext in EXTENSIONS:
            try:
                await self.load_extension(ext)
                logger.info("Loaded extension: %s", ext)
            except Exception as exc:
                logger.error("Failed to load extension %s: %s", ext, exc)

        self.add_view(WarningView(self.cfg))

    async def on_ready(self) -> None:
        """Fired on every fresh connection once the guild cache is populated."""
        resync(self.store, build_snapshot(self.guilds))

        assert self.user is not None  # guaranteed after on_ready
        logger.info(
            "Logged in as %s (ID: %s), %d guilds",
            self.user.name, self.user.id, len(self.guilds),
        )

        # --- Slash-command sync ---------------------------------------------
        try:
            dev_guild_id = os.getenv("DEV_GUILD_ID")
            if dev_guild_id:
                guild = discord.Object(id=int(dev_guild_id))
                self.tree.copy_global_to(guild=guild)
                synced = await self.tree.sync(guild=guild)
                logger.info("Synced %d commands to dev guild %s", len(synced), dev_guild_id)
            else:
                synced = await self.tree.sync()
                logger.info("Synced %d commands globally", len(synced))
        except discord.HTTPException as exc:
            logger.warning("Failed to register the slash commands: %s", exc)

        await self.change_presence(
            activity=discord.Activity(type=discord.ActivityType.watching, name=self.cfg.activity_text),
        )
        logger.info("Ready.")

    async def on_guild_available(self, guild: discord.Guild) -> None:
        self._absorb_guild(guild)

    async def on_guild_join(self, guild: discord.Guild) -> None:
        self._absorb_guild(guild)

    def _absorb_guild(self, guild: discord.Guild) -> None:
        """Upsert a guild that showed up mid-session (never resets)."""
        events = guild_events(guild)
        for event in events:
            self.apply(event)
        logger.info("Guild %s (%s) absorbed: %d events", guild.name, guild.id, len(events))
