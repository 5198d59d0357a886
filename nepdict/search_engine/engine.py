"""Search engine owning the record store, index and result cache."""

import random
from pathlib import Path
from typing import List, Optional

from ..logging_config import Timer, get_logger, log_event, log_performance
from ..models import (
    CacheConfig,
    Entry,
    NepdictConfig,
    SearchConfig,
    SearchField,
    SearchResult,
    SearchStats,
)
from .cache.memory_cache import ResultCache, make_cache_key
from .loaders.json_loader import RecordStore, sources_from_directory
from .search.indexer import IndexBuilder, SearchIndex
from .search.text_search import IndexedTextSearchEngine

logger = get_logger(__name__)


class SearchEngine:
    """Ranked dictionary search over a lazily loaded record store.

    The index is built once the store has loaded. Publishing a new index
    and clearing the result cache happen together in one synchronous step,
    so a query never sees a new index alongside results cached from the
    old one.
    """

    def __init__(
        self,
        store: RecordStore,
        search_config: Optional[SearchConfig] = None,
        cache_config: Optional[CacheConfig] = None,
        index_builder: Optional[IndexBuilder] = None
    ):
        self.store = store
        self.search_config = search_config or SearchConfig()
        self.cache_config = cache_config or CacheConfig()
        self.index_builder = index_builder or IndexBuilder()
        self.text_search = IndexedTextSearchEngine(
            max_results=self.search_config.max_results,
            fuzzy_threshold=self.search_config.fuzzy_threshold,
        )
        self.cache = ResultCache(max_entries=self.cache_config.max_entries)
        self._index: Optional[SearchIndex] = None

    @classmethod
    def from_config(cls, config: NepdictConfig) -> "SearchEngine":
        """Create an engine reading the configured JSON files."""
        sources = sources_from_directory(Path(config.data.data_dir), config.data.sources)
        return cls(
            RecordStore(sources),
            search_config=config.search,
            cache_config=config.cache,
        )

    @property
    def is_ready(self) -> bool:
        return self._index is not None

    @property
    def index(self) -> SearchIndex:
        """The published index; empty before the first load."""
        return self._index if self._index is not None else SearchIndex()

    @property
    def entries(self) -> List[Entry]:
        return list(self.index.entries)

    async def ensure_loaded(self) -> SearchIndex:
        """Load the store and build the index on first use."""
        if self._index is None:
            entries = await self.store.load()
            if self._index is None:
                self._publish(entries)
        return self._index

    async def reload(self) -> SearchIndex:
        """Refetch every source, then rebuild the index and clear the cache."""
        entries = await self.store.reload()
        self._publish(entries)
        return self._index

    def rebuild(self) -> SearchIndex:
        """Rebuild the index from the entries the store currently holds."""
        self._publish(self.store.entries)
        return self._index

    def _publish(self, entries: List[Entry]) -> None:
        with Timer() as timer:
            index = self.index_builder.build(entries)
        # No await between these two lines
        self._index = index
        self.cache.clear()
        log_performance(
            __name__,
            "Search index build",
            timer.duration_ms,
            entry_count=len(index.entries),
            index_size=index.size,
        )

    def search(
        self,
        query_text: str,
        fields: Optional[List[SearchField]] = None
    ) -> List[SearchResult]:
        """Ranked search, served from the cache when possible.

        An empty or whitespace-only query returns a random sample of
        entries with empty match metadata instead of an error. The sample
        is cached like any other result, so repeating the query returns
        the same list until the index is republished or the cache cleared.
        """
        query_text = query_text or ""
        index = self._index
        if index is None:
            logger.debug("Search before load", extra={"query": query_text})
            return []

        key = make_cache_key(query_text, fields)
        if self.cache_config.enabled:
            cached = self.cache.get(key)
            if cached is not None:
                logger.debug("Search cache hit", extra={"query": query_text})
                return cached

        if query_text.strip():
            results = self.text_search.search(query_text, index, fields)
        else:
            results = [SearchResult(entry=entry) for entry in self.random_entries()]
        if self.cache_config.enabled:
            self.cache.put(key, results)
        return results

    def random_entries(self, count: Optional[int] = None) -> List[Entry]:
        """Uniform random sample of entries without replacement."""
        if count is None:
            count = self.search_config.random_sample_size
        entries = self.index.entries
        return random.sample(entries, min(max(count, 0), len(entries)))

    def clear_cache(self) -> None:
        self.cache.clear()
        log_event(__name__, "Search cache cleared")

    def stats(self) -> SearchStats:
        cache_stats = self.cache.get_stats()
        index = self.index
        return SearchStats(
            total_entries=len(index.entries),
            index_size=index.size,
            cache_size=cache_stats["entry_count"],
            cache_hits=cache_stats["hits"],
            cache_misses=cache_stats["misses"],
        )
