"""
misfire.engine.associations — Voice/Text Association Extension Point
=====================================================================

Placeholder for explicit voice-channel ↔ text-channel pairing.  Today the
classifier pairs channels purely by identical display name and never looks
here.  The bot only builds a repository when ``associations_enabled`` is
set in ``config.yaml``, and even then it just holds on to it.

:class:`NullAssociationRepository` is the only implementation: every call
succeeds and changes nothing.  The error types are declared so a real
backend has somewhere to report failures.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from misfire.engine.membership import GuildId

__all__ = [
    "AssociationError",
    "PairNotFoundError",
    "AssociationRepository",
    "NullAssociationRepository",
]

logger = logging.getLogger(__name__)


class AssociationError(Exception):
    """Any failure while storing or removing an association."""


class PairNotFoundError(AssociationError):
    """Raised when removing a voice/text pair that isn't registered."""

    def __init__(self, voice_name: str, text_name: str) -> None:
        super().__init__(f"No association between {voice_name!r} and {text_name!r}")
        self.voice_name = voice_name
        self.text_name = text_name


class AssociationRepository(Protocol):
    def add_or_update(self, guild_id: GuildId, voice_name: str, text_name: str) -> None: ...

    def remove(self, guild_id: GuildId, voice_name: str, text_name: str) -> None: ...


class NullAssociationRepository:
    """Accepts every call and stores nothing."""

    def add_or_update(self, guild_id: GuildId, voice_name: str, text_name: str) -> None:
        logger.debug(
            "Association add ignored (guild=%s, voice=%r, text=%r)",
            guild_id, voice_name, text_name,
        )

    def remove(self, guild_id: GuildId, voice_name: str, text_name: str) -> None:
        logger.debug(
            "Association remove ignored (guild=%s, voice=%r, text=%r)",
            guild_id, voice_name, text_name,
        )
