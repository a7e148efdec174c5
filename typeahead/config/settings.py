"""
Central configuration for the typeahead service.

All tunables live here. Nothing is hardcoded in module code.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Optional


def _project_root() -> Path:
    """Walk up from this file to find the project root (where pyproject.toml lives)."""
    current = Path(__file__).resolve().parent
    while current != current.parent:
        if (current / "pyproject.toml").exists():
            return current
        current = current.parent
    # Fallback: two levels up from config/settings.py
    return Path(__file__).resolve().parent.parent.parent


@dataclass(frozen=True)
class StoreSettings:
    """Settings for the sorted-set store backing the completion corpus."""

    # "redis" for a real server, "memory" for an in-process sorted set
    backend: str = "redis"

    host: str = "localhost"
    port: int = 6379

    # Logical database number passed to SELECT
    db: int = 0

    # Full connection URL (redis://...). Takes precedence over host/port/db.
    url: Optional[str] = None

    # Prepended to key_suffix so several corpora can share one server
    key_prefix: str = ""
    key_suffix: str = "completer"

    # Members come back as str rather than bytes
    decode_responses: bool = True

    @property
    def key(self) -> str:
        """Name of the sorted set holding the corpus."""
        return f"{self.key_prefix}{self.key_suffix}"


@dataclass(frozen=True)
class CompletionSettings:
    """Settings for the completion engine."""

    # Members fetched per range round trip
    window_size: int = 50

    # Appended to a word to mark a leaf. Must sort before every permitted character.
    sentinel: str = "*"

    # Completions returned when the caller gives no limit
    default_limit: int = 10

    # Upper bound accepted by the API
    max_limit: int = 100

    # Hold a per-engine lock around add/remove mutations
    serialize_mutations: bool = True


@dataclass(frozen=True)
class ApiSettings:
    """Settings for the HTTP API."""

    title: str = "Typeahead API"
    version: str = "0.1.0"
    description: str = "Prefix completion backed by a Redis sorted set"


@dataclass
class Settings:
    """
    Top-level settings container. Aggregates all subsystem settings.

    Usage:
        settings = get_settings()
        print(settings.store.key)
        print(settings.completion.window_size)
    """

    project_root: Path = field(default_factory=_project_root)
    store: StoreSettings = field(default_factory=StoreSettings)
    completion: CompletionSettings = field(default_factory=CompletionSettings)
    api: ApiSettings = field(default_factory=ApiSettings)

    @property
    def data_dir(self) -> Path:
        """Root directory for all runtime data (logs, exports)."""
        return self.project_root / "data"

    @property
    def logs_dir(self) -> Path:
        """Root directory for log files."""
        return self.data_dir / "logs"

    @property
    def exports_dir(self) -> Path:
        """Default directory for corpus snapshots."""
        return self.data_dir / "exports"

    def ensure_dirs(self) -> None:
        """Create all required data directories if they don't exist."""
        self.logs_dir.mkdir(parents=True, exist_ok=True)
        self.exports_dir.mkdir(parents=True, exist_ok=True)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Returns the singleton Settings instance.

    Call this instead of constructing Settings() directly so the entire
    application shares one config object.
    """
    settings = Settings()
    settings.ensure_dirs()
    return settings
