from typeahead.config.logging_config import setup_logging
from typeahead.config.settings import (
    ApiSettings,
    CompletionSettings,
    Settings,
    StoreSettings,
    get_settings,
)

__all__ = [
    "ApiSettings",
    "CompletionSettings",
    "Settings",
    "StoreSettings",
    "get_settings",
    "setup_logging",
]
