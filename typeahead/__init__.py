"""Typeahead completion backed by a Redis sorted set."""

from typeahead.completion import Completion, CompletionEngine, Statistics
from typeahead.exceptions import (
    EmptyInputError,
    ImproperlyConfigured,
    InvalidInputError,
    PartialAddError,
    StoreError,
    TypeaheadError,
)

__version__ = "0.1.0"

__all__ = [
    "Completion",
    "CompletionEngine",
    "EmptyInputError",
    "ImproperlyConfigured",
    "InvalidInputError",
    "PartialAddError",
    "Statistics",
    "StoreError",
    "TypeaheadError",
]
