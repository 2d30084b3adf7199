"""Best-effort, time-boxed cache for GitHub responses."""

import json
import logging
import time
from typing import Any, Callable, MutableMapping, Optional

logger = logging.getLogger(__name__)

CACHE_PREFIX = "gh_cache_"
DEFAULT_TTL_SECONDS = 60.0


class TTLCache:
    """
    Key-value cache whose entries expire after a fixed window.

    Entries are stored as JSON strings ``{"data": ..., "timestamp": ...}``
    under ``gh_cache_<key>`` in ``store``, which can be any mutable mapping
    (a plain dict for a single process, a session-scoped store per client).
    Failures to read, write or serialise are logged and ignored: a broken
    cache only ever means a cache miss.
    """

    def __init__(
        self,
        store: Optional[MutableMapping[str, str]] = None,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize the cache.

        Args:
            store: Backing key-value store. Defaults to a new dict.
            ttl_seconds: Validity window of an entry.
            clock: Returns the current time in seconds.
        """
        self.store = store if store is not None else {}
        self.ttl_seconds = ttl_seconds
        self.clock = clock

    def get(self, key: str) -> Optional[Any]:
        """Return the cached data for ``key``, or None if absent or expired."""
        try:
            raw = self.store.get(CACHE_PREFIX + key)
            if raw is None:
                return None

            entry = json.loads(raw)
            if self.clock() - entry["timestamp"] >= self.ttl_seconds:
                self.evict(key)
                return None
            return entry["data"]
        except Exception as e:
            logger.debug(f"Cache read failed for {key}: {e}")
            return None

    def set(self, key: str, data: Any) -> None:
        """Store ``data`` under ``key`` with the current timestamp."""
        try:
            entry = {"data": data, "timestamp": self.clock()}
            self.store[CACHE_PREFIX + key] = json.dumps(entry)
        except Exception as e:
            # Store full or data not serialisable
            logger.debug(f"Cache write failed for {key}: {e}")

    def evict(self, key: str) -> None:
        try:
            self.store.pop(CACHE_PREFIX + key, None)
        except Exception as e:
            logger.debug(f"Cache evict failed for {key}: {e}")
