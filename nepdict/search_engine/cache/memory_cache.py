"""In-memory LRU cache for ranked search results."""

import threading
from collections import OrderedDict
from typing import Any, Dict, List, Optional, Tuple

from ... import constants
from ...logging_config import get_logger
from ...models import SearchField, SearchResult, field_list

logger = get_logger(__name__)

CacheKey = Tuple[str, Tuple[str, ...]]


def make_cache_key(query_text: str, fields: Optional[List[SearchField]] = None) -> CacheKey:
    """Key on the raw query and the sorted field list (defaults when omitted)."""
    return query_text, tuple(sorted(f.value for f in field_list(fields)))


class ResultCache:
    """Least-recently-used cache of ranked result lists.

    A hit returns the stored ranking unchanged; nothing is re-ranked. The
    owning engine clears the cache whenever it publishes a new index.
    """

    def __init__(self, max_entries: int = constants.DEFAULT_CACHE_MAX_ENTRIES):
        self._max_entries = max_entries
        self._entries: "OrderedDict[CacheKey, Tuple[SearchResult, ...]]" = OrderedDict()
        self._lock = threading.RLock()
        self._stats = {
            'hits': 0,
            'misses': 0,
            'evictions': 0,
        }

    def get(self, key: CacheKey) -> Optional[List[SearchResult]]:
        """Get a cached ranking, or None on a miss."""
        with self._lock:
            value = self._entries.get(key)

            if value is None:
                self._stats['misses'] += 1
                return None

            self._entries.move_to_end(key)
            self._stats['hits'] += 1
            return list(value)

    def put(self, key: CacheKey, results: List[SearchResult]) -> None:
        """Store a ranking, evicting the least recently used entry when full."""
        with self._lock:
            if key in self._entries:
                del self._entries[key]

            while len(self._entries) >= self._max_entries:
                evicted_key, _ = self._entries.popitem(last=False)
                self._stats['evictions'] += 1
                logger.debug("Evicted cached results", extra={"cache_key": evicted_key})

            self._entries[key] = tuple(results)

    def clear(self) -> None:
        """Clear all entries from the cache."""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: CacheKey) -> bool:
        return key in self._entries

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        with self._lock:
            total_requests = self._stats['hits'] + self._stats['misses']
            hit_rate = self._stats['hits'] / total_requests if total_requests > 0 else 0.0

            return {
                'max_entries': self._max_entries,
                'entry_count': len(self._entries),
                'hit_rate': hit_rate,
                'hits': self._stats['hits'],
                'misses': self._stats['misses'],
                'evictions': self._stats['evictions'],
            }
