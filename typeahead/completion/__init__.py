"""Prefix completion over a trie emulated in a sorted set."""

from typeahead.completion.codec import EntryCodec
from typeahead.completion.engine import Completion, CompletionEngine, Statistics
from typeahead.completion.normalizer import normalize_word

__all__ = [
    "Completion",
    "CompletionEngine",
    "EntryCodec",
    "Statistics",
    "normalize_word",
]
