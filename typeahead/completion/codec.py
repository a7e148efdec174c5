"""
Encoding of words as sorted-set members.

A word ``w`` is stored as one leaf member ``w + sentinel`` plus one bare
member for each strict prefix ``w[:i]``, ``0 <= i < len(w)`` (the empty
string included). With every score at 0 the set is ordered
lexicographically, so:

- all members sharing a prefix are contiguous, and
- since the sentinel sorts before every character a word may contain,
  ``w + sentinel`` comes right after the bare ``w`` and before every
  longer member that starts with ``w``.
"""

from __future__ import annotations

from typeahead.exceptions import ImproperlyConfigured

# Every ASCII digit and letter must sort after the sentinel.
_LOWEST_WORD_CHAR = "0"


class EntryCodec:
    """Map words to leaf / prefix members and back."""

    def __init__(self, sentinel: str = "*") -> None:
        if not isinstance(sentinel, str) or len(sentinel) != 1:
            raise ImproperlyConfigured(
                f"sentinel must be a single character, got {sentinel!r}"
            )
        if not sentinel < _LOWEST_WORD_CHAR:
            raise ImproperlyConfigured(
                f"sentinel {sentinel!r} must sort before {_LOWEST_WORD_CHAR!r} "
                "so that leaves precede deeper prefixes"
            )
        self.sentinel = sentinel

    def leaf(self, word: str) -> str:
        return word + self.sentinel

    def prefixes(self, word: str) -> list[str]:
        """Strict prefixes of *word*, shortest first."""
        return [word[:i] for i in range(len(word))]

    def is_leaf(self, member: str) -> bool:
        return member.endswith(self.sentinel)

    def word_of(self, member: str) -> str:
        """Strip the sentinel from a leaf member."""
        return member[:-1]
