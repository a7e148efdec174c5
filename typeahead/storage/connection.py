"""
Redis client factory.

All server access in the project goes through get_client() or build_store().

Design decisions:
- One ``redis.asyncio.Redis`` per (url | host, port, db). The client owns a
  connection pool, so concurrent commands from one engine run on separate
  pooled connections.
- Clients are created lazily; no round trip happens until the first command.
- decode_responses follows StoreSettings so members come back as str.
"""

from __future__ import annotations

import logging
import threading
from typing import Optional

from redis.asyncio import Redis

from typeahead.config.settings import StoreSettings, get_settings
from typeahead.exceptions import ImproperlyConfigured
from typeahead.storage.ordered_set import (
    MemoryOrderedSetStore,
    OrderedSetStore,
    RedisOrderedSetStore,
)

logger = logging.getLogger(__name__)

# Module-level lock for client creation
_lock = threading.Lock()

# Singleton client per connection target
_clients: dict[str, Redis] = {}


def _client_key(store_settings: StoreSettings) -> str:
    if store_settings.url:
        return store_settings.url
    return f"redis://{store_settings.host}:{store_settings.port}/{store_settings.db}"


def get_client(store_settings: Optional[StoreSettings] = None) -> Redis:
    """
    Get the shared async Redis client for a connection target.

    Args:
        store_settings: Connection settings. If None, uses the defaults
                        from get_settings().

    Returns:
        A configured redis.asyncio.Redis.
    """
    if store_settings is None:
        store_settings = get_settings().store

    key = _client_key(store_settings)

    with _lock:
        if key in _clients:
            return _clients[key]

        if store_settings.url:
            client = Redis.from_url(
                store_settings.url,
                decode_responses=store_settings.decode_responses,
            )
        else:
            client = Redis(
                host=store_settings.host,
                port=store_settings.port,
                db=store_settings.db,
                decode_responses=store_settings.decode_responses,
            )

        _clients[key] = client
        logger.info("Redis client created for %s", key)
        return client


async def close_client(store_settings: Optional[StoreSettings] = None) -> None:
    """
    Close the client for a connection target (or the default).

    Useful in tests and shutdown hooks.
    """
    if store_settings is None:
        store_settings = get_settings().store

    key = _client_key(store_settings)

    with _lock:
        client = _clients.pop(key, None)
    if client is not None:
        await client.aclose()
        logger.info("Redis client closed: %s", key)


async def close_all_clients() -> None:
    """Close all open clients. Used during shutdown."""
    with _lock:
        clients = list(_clients.items())
        _clients.clear()
    for key, client in clients:
        await client.aclose()
        logger.info("Redis client closed: %s", key)


def build_store(store_settings: Optional[StoreSettings] = None) -> OrderedSetStore:
    """Return the store selected by ``store_settings.backend``."""
    if store_settings is None:
        store_settings = get_settings().store

    if store_settings.backend == "memory":
        logger.info("Using in-memory sorted set store")
        return MemoryOrderedSetStore()
    if store_settings.backend == "redis":
        return RedisOrderedSetStore(get_client(store_settings))
    raise ImproperlyConfigured(f"Unknown store backend: {store_settings.backend!r}")
