"""Exceptions raised by the typeahead package."""

from __future__ import annotations


class TypeaheadError(Exception):
    """Base class for every error raised by this package."""


class InvalidInputError(TypeaheadError, TypeError):
    """The argument is not text, or holds characters the corpus cannot encode."""


class EmptyInputError(TypeaheadError, ValueError):
    """The argument is blank once trimmed and lowercased."""


class StoreError(TypeaheadError):
    """The sorted-set store reported a failure."""


class ImproperlyConfigured(TypeaheadError):
    """Settings that would break the ordering the engine relies on."""


class PartialAddError(TypeaheadError):
    """
    Raised by ``add_many`` when at least one element failed.

    Insertions made by the elements that succeeded are kept. ``added``
    holds the newly learned words, ``errors`` the failures in input order.
    """

    def __init__(self, added: list[str], errors: list[BaseException]) -> None:
        self.added = added
        self.errors = errors
        super().__init__(
            f"{len(errors)} word(s) failed, {len(added)} newly added: {errors[0]}"
        )
