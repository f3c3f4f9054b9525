"""
misfire.engine.membership — The Membership Store
=================================================

**Why this file exists:**
Misfire needs to know two things at the moment a message arrives:

1. What every known channel is currently called.
2. Which voice channel (if any) the author is sitting in.

:class:`MembershipStore` keeps both as plain dicts behind a
:class:`~misfire.engine.rwlock.ReadWriteLock`.  There is no I/O here; the
bot feeds it gateway events and asks it for verdicts and debug dumps.

Tables::

    channel_names:    (guild_id, channel_id) → display name
    voice_presences:  user_id → (guild_id, channel_id)

Every mutation is last-write-wins and idempotent.  Absent keys mean
"unknown", never an error.

Usage::

    store = MembershipStore()
    store.upsert_channel_name(guild_id, vc_id, "Raid Night")
    store.upsert_voice_presence(user_id, guild_id, vc_id)

    if store.is_out_of_voice_context(user_id, guild_id, msg_channel_id):
        ...  # warn (after the lock is released, no I/O under it)
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from types import MappingProxyType
from typing import NewType

from misfire.engine.classifier import is_out_of_voice_context as classify
from misfire.engine.rwlock import ReadWriteLock

__all__ = [
    "GuildId",
    "ChannelId",
    "UserId",
    "ChannelKey",
    "MembershipView",
    "MembershipStore",
    "CHANNEL_NAMES_HEADER",
    "VOICE_PRESENCES_HEADER",
]

# ---------------------------------------------------------------------------
# Identifier types: opaque Discord snowflakes.  Equality and hashing only.
# ---------------------------------------------------------------------------
GuildId = NewType("GuildId", int)
ChannelId = NewType("ChannelId", int)
UserId = NewType("UserId", int)
ChannelKey = tuple[GuildId, ChannelId]

# Dump section headers (one header line per table, then one line per entry)
CHANNEL_NAMES_HEADER = "channel_names: guild_id,channel_id,name"
VOICE_PRESENCES_HEADER = "user_vc_pairs: user_id,guild_id,channel_id"


class MembershipView:
    """Read-only window onto the store's tables.

    Only valid while the read lock that produced it is held, i.e. inside
    ``with store.reading() as view:``.
    """

    __slots__ = ("channel_names", "voice_presences")

    def __init__(
        self,
        channel_names: Mapping[ChannelKey, str],
        voice_presences: Mapping[UserId, ChannelKey],
    ) -> None:
        self.channel_names = channel_names
        self.voice_presences = voice_presences

    def channel_name(self, guild_id: GuildId, channel_id: ChannelId) -> str | None:
        return self.channel_names.get((guild_id, channel_id))

    def voice_presence(self, user_id: UserId) -> ChannelKey | None:
        return self.voice_presences.get(user_id)


class MembershipStore:
    """In-memory channel-name and voice-presence tables.

    One instance per bot connection.  It is owned by the bot object and
    handed to cogs by reference; nothing else touches the dicts.
    """

    def __init__(self) -> None:
        self._lock = ReadWriteLock()
        self._channel_names: dict[ChannelKey, str] = {}
        self._voice_presences: dict[UserId, ChannelKey] = {}

    # -------------------------------------------------------------------
    # Channel Name Table
    # -------------------------------------------------------------------
    def upsert_channel_name(self, guild_id: GuildId, channel_id: ChannelId, name: str) -> None:
        """Insert or overwrite the display name for ``(guild_id, channel_id)``."""
        with self._lock.write_locked():
            self._channel_names[(guild_id, channel_id)] = name

    def remove_channel_name(self, guild_id: GuildId, channel_id: ChannelId) -> None:
        """Forget a channel.  No-op if it was never known."""
        with self._lock.write_locked():
            self._channel_names.pop((guild_id, channel_id), None)

    # -------------------------------------------------------------------
    # Voice Presence Table
    # -------------------------------------------------------------------
    def upsert_voice_presence(
        self, user_id: UserId, guild_id: GuildId, channel_id: ChannelId,
    ) -> None:
        """Record that *user_id* now sits in ``(guild_id, channel_id)``.

        A user can only be in one voice channel, so a move simply
        overwrites the previous entry.
        """
        with self._lock.write_locked():
            self._voice_presences[user_id] = (guild_id, channel_id)

    def remove_voice_presence(self, user_id: UserId) -> None:
        """Record that *user_id* left voice.  No-op if not tracked."""
        with self._lock.write_locked():
            self._voice_presences.pop(user_id, None)

    # -------------------------------------------------------------------
    # Whole-store operations
    # -------------------------------------------------------------------
    def reset(self) -> None:
        """Empty both tables.  Called on every (re)connect before resync."""
        with self._lock.write_locked():
            self._channel_names.clear()
            self._voice_presences.clear()

    def dump(self) -> str:
        """Render both tables as text for the debug command.

        Channel names come first, then voice presences.  Each section is a
        header line followed by one ``a,b,c`` line per entry in insertion
        order.
        """
        with self._lock.read_locked():
            lines = [CHANNEL_NAMES_HEADER]
            lines.extend(
                f"{guild_id},{channel_id},{name}"
                for (guild_id, channel_id), name in self._channel_names.items()
            )
            lines.append(VOICE_PRESENCES_HEADER)
            lines.extend(
                f"{user_id},{guild_id},{channel_id}"
                for user_id, (guild_id, channel_id) in self._voice_presences.items()
            )
        return "\n".join(lines)

    def counts(self) -> tuple[int, int]:
        """Return ``(channel_count, presence_count)``."""
        with self._lock.read_locked():
            return len(self._channel_names), len(self._voice_presences)

    # -------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------
    @contextmanager
    def reading(self) -> Iterator[MembershipView]:
        """Hold the read lock and yield a consistent read-only view."""
        with self._lock.read_locked():
            yield MembershipView(
                MappingProxyType(self._channel_names),
                MappingProxyType(self._voice_presences),
            )

    def channel_name(self, guild_id: GuildId, channel_id: ChannelId) -> str | None:
        with self._lock.read_locked():
            return self._channel_names.get((guild_id, channel_id))

    def voice_presence(self, user_id: UserId) -> ChannelKey | None:
        with self._lock.read_locked():
            return self._voice_presences.get(user_id)

    def is_out_of_voice_context(
        self, author_id: UserId, guild_id: GuildId, channel_id: ChannelId,
    ) -> bool:
        """Run the classifier against a consistent snapshot of the tables."""
        with self.reading() as view:
            return classify(view, author_id, guild_id, channel_id)
