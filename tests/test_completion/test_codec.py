"""Tests for the leaf / prefix member encoding."""

from __future__ import annotations

import pytest

from typeahead.completion.codec import EntryCodec
from typeahead.exceptions import ImproperlyConfigured


class TestEntryCodec:
    def test_leaf(self):
        assert EntryCodec().leaf("cat") == "cat*"

    def test_prefixes_shortest_first(self):
        assert EntryCodec().prefixes("cat") == ["", "c", "ca"]

    def test_single_character_word(self):
        assert EntryCodec().prefixes("a") == [""]

    def test_leaf_detection(self):
        codec = EntryCodec()
        assert codec.is_leaf("cat*")
        assert not codec.is_leaf("cat")
        assert not codec.is_leaf("")

    def test_word_of(self):
        assert EntryCodec().word_of("cat*") == "cat"

    def test_leaf_sorts_between_word_and_extensions(self):
        codec = EntryCodec()
        members = ["cats", "cat", codec.leaf("cat"), "cat0", codec.leaf("ca")]
        assert sorted(members) == ["ca*", "cat", "cat*", "cat0", "cats"]

    def test_custom_sentinel(self):
        codec = EntryCodec("\x01")
        assert codec.leaf("new york") == "new york\x01"
        assert codec.is_leaf("new york\x01")

    @pytest.mark.parametrize("sentinel", ["", "**", "a", "0", "~"])
    def test_bad_sentinel_rejected(self, sentinel):
        with pytest.raises(ImproperlyConfigured):
            EntryCodec(sentinel)
