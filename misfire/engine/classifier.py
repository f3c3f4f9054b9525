"""
misfire.engine.classifier — Out-of-VC Message Classifier
=========================================================

Decides whether a message was posted outside its author's voice context.

Pairing convention: a voice channel and its companion text channel share
the same display name.  We therefore compare **resolved names**, not
channel keys: the text channel ``raid-night`` pairs with the voice
channel ``raid-night`` even though their snowflakes differ.

Truth table::

    author in voice?   voice name   message-channel name   → out of VC?
    ----------------   ----------   --------------------     ----------
    no                 —            —                        False
    yes                "A"          "A"                      False
    yes                "A"          "B"                      True
    yes                "A"          (unknown)                True
    yes                (unknown)    anything / (unknown)     True
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from misfire.engine.membership import ChannelId, GuildId, MembershipView, UserId

__all__ = ["is_out_of_voice_context"]


def is_out_of_voice_context(
    view: MembershipView,
    author_id: UserId,
    guild_id: GuildId,
    channel_id: ChannelId,
) -> bool:
    """Return True if the message should trigger a misfire warning.

    Total over its inputs; never raises and never mutates *view*.
    """
    voice_key = view.voice_presence(author_id)
    if voice_key is None:
        # Not in a call, so nothing to be "out of".
        return False

    voice_name = view.channel_name(*voice_key)
    message_name = view.channel_name(guild_id, channel_id)

    # An unresolved name never matches anything, not even another unknown.
    if voice_name is None or message_name is None:
        return True
    return voice_name != message_name
