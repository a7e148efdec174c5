"""Completion CLI: add, remove and query words, inspect or snapshot a corpus."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
from dataclasses import asdict, replace
from pathlib import Path

from typeahead.completion.engine import CompletionEngine
from typeahead.completion.snapshot import export_words, import_words
from typeahead.config.logging_config import setup_logging
from typeahead.config.settings import get_settings
from typeahead.exceptions import TypeaheadError
from typeahead.storage.connection import close_all_clients

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Prefix completion tools.")
    parser.add_argument("--host", default=None, help="Redis host.")
    parser.add_argument("--port", type=int, default=None, help="Redis port.")
    parser.add_argument("--db", type=int, default=None, help="Redis database number.")
    parser.add_argument("--url", default=None, help="Redis URL (overrides host/port/db).")
    parser.add_argument("--key-prefix", default=None, help="Prefix for the sorted set key.")
    parser.add_argument("--memory", action="store_true", help="Use a throwaway in-memory store.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    sub = parser.add_subparsers(dest="command")

    add = sub.add_parser("add", help="Add words.")
    add.add_argument("words", nargs="+", help="Words to add.")

    remove = sub.add_parser("remove", help="Remove a word.")
    remove.add_argument("word", help="Word to remove.")

    complete = sub.add_parser("complete", help="Complete a prefix.")
    complete.add_argument("prefix", help="Prefix to complete.")
    complete.add_argument("--limit", type=int, default=None, help="Max completions.")

    sub.add_parser("stats", help="Show corpus statistics.")
    sub.add_parser("flush", help="Delete the whole corpus.")

    export = sub.add_parser("export", help="Write all words to a msgpack snapshot.")
    export.add_argument("path", type=Path, help="Snapshot file.")

    load = sub.add_parser("import", help="Add all words from a msgpack snapshot.")
    load.add_argument("path", type=Path, help="Snapshot file.")

    return parser


def _store_settings(args: argparse.Namespace):
    store = get_settings().store
    overrides = {
        "host": args.host,
        "port": args.port,
        "db": args.db,
        "url": args.url,
        "key_prefix": args.key_prefix,
    }
    store = replace(store, **{k: v for k, v in overrides.items() if v is not None})
    if args.memory:
        store = replace(store, backend="memory")
    return store


async def _run(args: argparse.Namespace) -> int:
    engine = CompletionEngine(
        store_settings=_store_settings(args),
        completion_settings=get_settings().completion,
    )
    try:
        if args.command == "add":
            added = await engine.add_many(args.words)
            print(json.dumps({"added": added}, indent=2))

        elif args.command == "remove":
            removed = await engine.remove(args.word)
            print(json.dumps({"word": args.word, "removed": removed}, indent=2))

        elif args.command == "complete":
            completion = await engine.complete(args.prefix, limit=args.limit)
            for word in completion.words:
                print(f"  {word}")

        elif args.command == "stats":
            stats = await engine.statistics()
            print(json.dumps(asdict(stats), indent=2))

        elif args.command == "flush":
            deleted = await engine.flush()
            print(json.dumps({"deleted": deleted}, indent=2))

        elif args.command == "export":
            count = await export_words(engine, args.path)
            print(json.dumps({"exported": count, "file_path": str(args.path)}, indent=2))

        elif args.command == "import":
            added = await import_words(engine, args.path)
            print(json.dumps({"imported": len(added)}, indent=2))
    finally:
        await close_all_clients()
    return 0


def main() -> int:
    parser = build_parser()
    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        return 1

    settings = get_settings()
    setup_logging(
        log_dir=settings.logs_dir,
        level=logging.DEBUG if args.verbose else logging.INFO,
    )

    try:
        return asyncio.run(_run(args))
    except TypeaheadError as e:
        logger.error("%s failed: %s", args.command, e)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
