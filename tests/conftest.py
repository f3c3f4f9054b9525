"""
tests/conftest.py — Shared Test Fixtures
=========================================
"""

from __future__ import annotations

import pytest

from misfire.config import MisfireConfig
from misfire.engine.membership import MembershipStore

GUILD_ID = 0


def _populate_vc_scenario(store: MembershipStore) -> MembershipStore:
    store.upsert_channel_name(GUILD_ID, 1, "VC1")  # voice
    store.upsert_channel_name(GUILD_ID, 2, "VC1")  # its text channel
    store.upsert_voice_presence(2, GUILD_ID, 1)
    return store


@pytest.fixture
def store() -> MembershipStore:
    """An empty membership store."""
    return MembershipStore()


@pytest.fixture
def vc_store() -> MembershipStore:
    """Canonical scenario: (0,1) and (0,2) both named "VC1", user 2 in (0,1)."""
    return _populate_vc_scenario(MembershipStore())


@pytest.fixture
def vc_store_factory():
    """Build independent copies of the canonical scenario."""
    return lambda: _populate_vc_scenario(MembershipStore())


@pytest.fixture
def cfg() -> MisfireConfig:
    return MisfireConfig()
