"""
misfire.engine.lifecycle — Gateway Events, Dispatch & Resync
=============================================================

Every gateway occurrence the store cares about is normalized into one of
the small frozen dataclasses below before it touches the store.  The bot
builds them from discord.py objects; tests build them by hand.

:func:`dispatch` routes an event to the matching store operation.
:func:`resync` is the connect-time path: reset, then replay a full
snapshot, with no ``await`` in between so no handler ever sees a
half-populated store.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from misfire.engine.membership import ChannelId, GuildId, MembershipStore, UserId

__all__ = [
    "ChannelInfo",
    "VoicePresence",
    "ChannelObserved",
    "ChannelDeleted",
    "VoiceJoined",
    "VoiceLeft",
    "MessagePosted",
    "ResyncSnapshot",
    "GatewayEvent",
    "dispatch",
    "resync",
]

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Snapshot rows
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class ChannelInfo:
    """One channel as seen in a guild snapshot."""

    guild_id: GuildId
    channel_id: ChannelId
    name: str


@dataclass(frozen=True, slots=True)
class VoicePresence:
    """One user sitting in one voice channel."""

    user_id: UserId
    guild_id: GuildId
    channel_id: ChannelId


# ---------------------------------------------------------------------------
# Gateway events
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class ChannelObserved:
    """Channel created, renamed, or seen in a newly available guild."""

    guild_id: GuildId
    channel_id: ChannelId
    name: str


@dataclass(frozen=True, slots=True)
class ChannelDeleted:
    guild_id: GuildId
    channel_id: ChannelId


@dataclass(frozen=True, slots=True)
class VoiceJoined:
    """User joined a voice channel or moved to another one."""

    user_id: UserId
    guild_id: GuildId
    channel_id: ChannelId


@dataclass(frozen=True, slots=True)
class VoiceLeft:
    user_id: UserId


@dataclass(frozen=True, slots=True)
class MessagePosted:
    author_id: UserId
    guild_id: GuildId
    channel_id: ChannelId


@dataclass(frozen=True, slots=True)
class ResyncSnapshot:
    """Everything visible right after a fresh connection."""

    channels: tuple[ChannelInfo, ...] = ()
    presences: tuple[VoicePresence, ...] = ()


GatewayEvent = (
    ChannelObserved
    | ChannelDeleted
    | VoiceJoined
    | VoiceLeft
    | MessagePosted
    | ResyncSnapshot
)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def resync(store: MembershipStore, snapshot: ResyncSnapshot) -> None:
    """Discard all state and rebuild it from *snapshot*.

    The reset always happens first, so anything the snapshot omits
    (e.g. voice presences) ends up empty rather than stale.
    """
    store.reset()
    for ch in snapshot.channels:
        store.upsert_channel_name(ch.guild_id, ch.channel_id, ch.name)
    for p in snapshot.presences:
        store.upsert_voice_presence(p.user_id, p.guild_id, p.channel_id)
    logger.info(
        "Resync complete: %d channels, %d voice presences",
        len(snapshot.channels), len(snapshot.presences),
    )


def dispatch(store: MembershipStore, event: GatewayEvent) -> bool | None:
    """Apply *event* to *store*.

    Returns the classifier verdict for :class:`MessagePosted` and ``None``
    for every mutation.

    Raises
    ------
    TypeError
        If *event* is not one of the gateway event types.
    """
    if isinstance(event, ChannelObserved):
        store.upsert_channel_name(event.guild_id, event.channel_id, event.name)
    elif isinstance(event, ChannelDeleted):
        store.remove_channel_name(event.guild_id, event.channel_id)
    elif isinstance(event, VoiceJoined):
        store.upsert_voice_presence(event.user_id, event.guild_id, event.channel_id)
    elif isinstance(event, VoiceLeft):
        store.remove_voice_presence(event.user_id)
    elif isinstance(event, MessagePosted):
        return store.is_out_of_voice_context(event.author_id, event.guild_id, event.channel_id)
    elif isinstance(event, ResyncSnapshot):
        resync(store, event)
    else:
        raise TypeError(f"Unsupported gateway event: {type(event).__name__}")
    return None
