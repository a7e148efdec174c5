"""
Corpus snapshots.

A snapshot is a msgpack map ``{"key": <sorted set name>, "words": [...]}``
holding every known word. Prefix members are not written; they are rebuilt
by ``add`` on import.
"""

from __future__ import annotations

import logging
from pathlib import Path

import msgpack

from typeahead.completion.engine import CompletionEngine

logger = logging.getLogger(__name__)


async def export_words(engine: CompletionEngine, path: Path) -> int:
    """Write every word of *engine* to *path*. Returns the word count."""
    words = [w async for w in engine.words()]
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "wb") as f:
        msgpack.pack({"key": engine.key, "words": words}, f)
    logger.info("Exported %d words from %s to %s", len(words), engine.key, path)
    return len(words)


async def import_words(engine: CompletionEngine, path: Path) -> list[str]:
    """Add every word found in the snapshot at *path*. Returns the new ones."""
    with open(path, "rb") as f:
        data = msgpack.unpack(f, raw=False)
    added = await engine.add_many(data["words"])
    logger.info(
        "Imported %s: %d of %d words were new",
        path, len(added), len(data["words"]),
    )
    return added
