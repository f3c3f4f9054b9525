"""
tests/test_classifier.py — Out-of-VC Classifier Tests
======================================================

Covers the regression truth table, the name-equality pairing convention,
and the "unresolved name never matches" edge cases.
"""

from __future__ import annotations

import pytest

from misfire.engine.classifier import is_out_of_voice_context


class TestTruthTable:
    """Names (0,1)→VC1, (0,2)→VC1; user 2 sits in (0,1)."""

    @pytest.mark.parametrize(
        "author, channel, expected",
        [
            (2, 2, False),  # in VC, posting in the VC's text channel
            (2, 3, True),   # in VC, posting somewhere unknown
            (3, 2, False),  # not in VC, posting in the VC's text channel
            (3, 3, False),  # not in VC, posting somewhere unknown
        ],
    )
    def test_regression_case(self, vc_store, author, channel, expected):
        assert vc_store.is_out_of_voice_context(author, 0, channel) is expected

    def test_posting_in_the_voice_channel_itself(self, vc_store):
        """Text-in-voice chat resolves to the same name."""
        assert vc_store.is_out_of_voice_context(2, 0, 1) is False


class TestNameEquality:

    def test_differently_keyed_channels_with_same_name_match(self, store):
        store.upsert_channel_name(0, 10, "Lounge")
        store.upsert_channel_name(0, 20, "Lounge")
        store.upsert_voice_presence(1, 0, 10)
        assert store.is_out_of_voice_context(1, 0, 20) is False

    def test_different_names_are_out_of_context(self, store):
        store.upsert_channel_name(0, 10, "Lounge")
        store.upsert_channel_name(0, 20, "general")
        store.upsert_voice_presence(1, 0, 10)
        assert store.is_out_of_voice_context(1, 0, 20) is True

    def test_comparison_is_case_sensitive(self, store):
        store.upsert_channel_name(0, 10, "Lounge")
        store.upsert_channel_name(0, 20, "lounge")
        store.upsert_voice_presence(1, 0, 10)
        assert store.is_out_of_voice_context(1, 0, 20) is True

    def test_same_name_across_guilds_matches(self, store):
        """Keys differ in guild too; only the names are compared."""
        store.upsert_channel_name(1, 10, "Lounge")
        store.upsert_channel_name(2, 20, "Lounge")
        store.upsert_voice_presence(1, 1, 10)
        assert store.is_out_of_voice_context(1, 2, 20) is False

    def test_rename_breaks_the_pair(self, store):
        store.upsert_channel_name(0, 10, "Lounge")
        store.upsert_channel_name(0, 20, "Lounge")
        store.upsert_voice_presence(1, 0, 10)
        store.upsert_channel_name(0, 20, "Lounge-text")
        assert store.is_out_of_voice_context(1, 0, 20) is True


class TestUnresolvedNames:

    def test_voice_channel_unresolved(self, store):
        store.upsert_channel_name(0, 20, "Lounge")
        store.upsert_voice_presence(1, 0, 10)
        assert store.is_out_of_voice_context(1, 0, 20) is True

    def test_both_unresolved_still_out_of_context(self, store):
        store.upsert_voice_presence(1, 0, 10)
        assert store.is_out_of_voice_context(1, 0, 20) is True

    def test_deleted_text_channel_becomes_unresolved(self, vc_store):
        vc_store.remove_channel_name(0, 2)
        assert vc_store.is_out_of_voice_context(2, 0, 2) is True

    def test_empty_names_are_ordinary_names(self, store):
        store.upsert_channel_name(0, 10, "")
        store.upsert_channel_name(0, 20, "")
        store.upsert_voice_presence(1, 0, 10)
        assert store.is_out_of_voice_context(1, 0, 20) is False


class TestPureFunction:

    def test_works_on_a_view_and_does_not_mutate(self, vc_store):
        before = vc_store.dump()
        with vc_store.reading() as view:
            assert is_out_of_voice_context(view, 2, 0, 3) is True
            assert is_out_of_voice_context(view, 2, 0, 2) is False
        assert vc_store.dump() == before

    def test_left_voice_means_no_warning(self, vc_store):
        vc_store.remove_voice_presence(2)
        assert vc_store.is_out_of_voice_context(2, 0, 3) is False
