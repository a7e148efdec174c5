"""Word normalization applied before anything touches the store."""

from __future__ import annotations

from typeahead.exceptions import EmptyInputError, InvalidInputError


def normalize_word(value: object, sentinel: str = "*") -> str:
    """
    Trim and lowercase *value*.

    Raises ``InvalidInputError`` when *value* is not a ``str`` or, once
    normalized, contains a character sorting at or below *sentinel* (such
    a word would break the leaf ordering), and ``EmptyInputError`` when
    nothing is left after trimming.
    """
    if not isinstance(value, str):
        raise InvalidInputError(f"expected str, got {type(value).__name__}")

    word = value.strip().lower()
    if not word:
        raise EmptyInputError("empty words are not accepted")

    lowest = min(word)
    if lowest <= sentinel:
        raise InvalidInputError(
            f"{word!r} contains {lowest!r}, which does not sort after the "
            f"leaf marker {sentinel!r}"
        )
    return word
