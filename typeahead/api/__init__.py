"""HTTP API over the completion engine."""

from typeahead.api.app import create_app

__all__ = ["create_app"]
