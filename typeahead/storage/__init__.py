from typeahead.storage.connection import (
    build_store,
    close_all_clients,
    close_client,
    get_client,
)
from typeahead.storage.ordered_set import (
    MemoryOrderedSetStore,
    OrderedSetStore,
    RedisOrderedSetStore,
)

__all__ = [
    "MemoryOrderedSetStore",
    "OrderedSetStore",
    "RedisOrderedSetStore",
    "build_store",
    "close_all_clients",
    "close_client",
    "get_client",
]
