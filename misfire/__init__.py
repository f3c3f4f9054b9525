"""
Misfire — Wrong-Channel Warnings for Discord Voice Chats
=========================================================
Tracks who is sitting in which voice channel and warns when someone in a
call posts in a text channel that doesn't belong to it.  A voice channel
and its companion text channel are paired by identical display name.

Package layout::

    misfire/
    ├── config.py          # YAML → typed Python config
    ├── constants.py       # Default UI strings, custom IDs, limits
    ├── logs.py            # Console / journald log formatting
    ├── engine/
    │   ├── membership.py  # MembershipStore: channel names + voice presence
    │   ├── classifier.py  # "Is this message out of VC?"
    │   ├── lifecycle.py   # Gateway event types, dispatch, resync
    │   ├── rwlock.py      # Reader/writer lock guarding the store
    │   └── associations.py # Explicit pairing extension point (no-op)
    └── bot/
        ├── core.py        # Bot subclass, cog loader, connect-time resync
        ├── __main__.py    # python -m misfire.bot
        └── cogs/
            ├── tracking.py  # Channel + voice-state listeners
            ├── warnings.py  # on_message verdict + warning buttons
            └── status.py    # /misfire status debug dump
"""

__version__ = "0.1.0"
