"""Convenience lookups layered over ``SearchEngine``.

Every method loads the dictionary on first use. Filter-style calls return
plain ``Entry`` lists in record order; search-style calls return ranked
``SearchResult`` lists with match metadata.
"""

from typing import Dict, List, Optional, Union

from ..models import (
    AdvancedSearchOptions,
    Entry,
    Frequency,
    SearchField,
    SearchResult,
    SearchStats,
)
from .engine import SearchEngine
from .search.fuzzy_matcher import FuzzyMatcher


class DictionaryAPI:
    """Typed facade over the search engine."""

    def __init__(self, engine: SearchEngine, fuzzy_matcher: Optional[FuzzyMatcher] = None):
        """Wrap an engine; the matcher is only used by similarity filters."""
        self.engine = engine
        self.fuzzy_matcher = fuzzy_matcher or FuzzyMatcher()

    @property
    def config(self):
        return self.engine.search_config

    async def load(self) -> List[Entry]:
        """Load the dictionary (once) and return every entry."""
        await self.engine.ensure_loaded()
        return self.engine.entries

    async def reload(self) -> List[Entry]:
        """Refetch every source, rebuild the index and clear the cache."""
        await self.engine.reload()
        return self.engine.entries

    # Ranked search

    async def search_words_enhanced(
        self,
        query: str,
        fields: Optional[List[SearchField]] = None
    ) -> List[SearchResult]:
        """Ranked search with match metadata.

        Args:
            query: Devanagari, romanized or English text; empty returns a sample
            fields: Fields to match; defaults to word, romanization,
                definitions and category

        Returns:
            Ranked results, served from the result cache when possible
        """
        await self.engine.ensure_loaded()
        return self.engine.search(query, fields)

    async def search_words(self, query: str) -> List[Entry]:
        """Ranked search returning bare entries."""
        results = await self.search_words_enhanced(query)
        return [result.entry for result in results]

    async def search_devanagari_words(self, query: str) -> List[SearchResult]:
        """Ranked search over Devanagari headwords only."""
        return await self.search_words_enhanced(query, [SearchField.WORD])

    async def search_romanization(self, query: str) -> List[SearchResult]:
        """Ranked search over romanizations only."""
        return await self.search_words_enhanced(query, [SearchField.ROMANIZATION])

    async def search_definitions(self, query: str) -> List[SearchResult]:
        """Ranked search over English definitions only."""
        return await self.search_words_enhanced(query, [SearchField.DEFINITIONS])

    async def search_in_fields(self, query: str, fields: List[SearchField]) -> List[SearchResult]:
        """Ranked search restricted to ``fields``."""
        return await self.search_words_enhanced(query, fields)

    async def lookup_verb(self, query: str) -> Optional[Entry]:
        """Best word/romanization match whose part of speech mentions "verb"."""
        results = await self.search_words_enhanced(
            query, [SearchField.WORD, SearchField.ROMANIZATION]
        )
        for result in results:
            if "verb" in result.entry.part_of_speech.lower():
                return result.entry
        return None

    async def advanced_search(
        self,
        options: Union[AdvancedSearchOptions, Dict, None] = None,
        **criteria
    ) -> List[SearchResult]:
        """Text search narrowed by category, frequency and part of speech.

        Args:
            options: An ``AdvancedSearchOptions`` instance or a dict with the
                same keys; keyword arguments are used when omitted
            **criteria: Option fields given directly

        Returns:
            Matching results, capped at ``advanced_max_results``. Without a
            query the results carry empty match metadata.
        """
        if options is None:
            options = AdvancedSearchOptions(**criteria)
        elif isinstance(options, dict):
            options = AdvancedSearchOptions(**options)

        query = options.query.strip() if options.query else ""
        if query:
            results = await self.search_words_enhanced(query, options.search_fields)
        else:
            results = [SearchResult(entry=entry) for entry in await self.load()]

        if options.category:
            results = [r for r in results if r.entry.category == options.category]

        if options.frequency:
            results = [r for r in results if r.entry.frequency == options.frequency]

        if options.part_of_speech:
            results = [r for r in results if r.entry.part_of_speech == options.part_of_speech]

        if options.exact_match and query:
            lower_query = query.lower()
            results = [
                r for r in results
                if r.entry.word == query or r.entry.romanization.lower() == lower_query
            ]

        if options.fuzzy_threshold < 1.0 and query:
            results = [
                r for r in results
                if self._passes_fuzzy_threshold(r.entry, query, options.fuzzy_threshold)
            ]

        return results[:self.config.advanced_max_results]

    def _passes_fuzzy_threshold(self, entry: Entry, query: str, threshold: float) -> bool:
        lower_query = query.lower()
        romanization = entry.romanization.lower()
        definitions = [definition.lower() for definition in entry.definitions]

        if query in entry.word or lower_query in romanization:
            return True
        if any(lower_query in definition for definition in definitions):
            return True

        similarity = self.fuzzy_matcher.similarity
        if similarity(query, entry.word) >= threshold:
            return True
        if similarity(lower_query, romanization) >= threshold:
            return True
        return any(
            similarity(lower_query, token) >= threshold
            for definition in definitions
            for token in definition.split()
        )

    async def find_similar_words(
        self,
        word: str,
        threshold: Optional[float] = None
    ) -> List[Entry]:
        """Entries whose word or romanization is close to ``word``.

        Args:
            word: Devanagari or romanized spelling to compare against
            threshold: Minimum similarity; defaults to the configured
                fuzzy threshold

        Returns:
            Entries ordered most similar first, capped at ``similar_max_results``
        """
        if threshold is None:
            threshold = self.config.fuzzy_threshold
        entries = await self.load()
        lower_word = word.lower()

        scored = []
        for entry in entries:
            best = max(
                self.fuzzy_matcher.similarity(word, entry.word),
                self.fuzzy_matcher.similarity(lower_word, entry.romanization.lower()),
            )
            if best >= threshold:
                scored.append((best, entry))

        scored.sort(key=lambda pair: pair[0], reverse=True)
        return [entry for _, entry in scored[:self.config.similar_max_results]]

    async def get_search_suggestions(
        self,
        partial_query: str,
        limit: Optional[int] = None
    ) -> List[str]:
        """Word and romanization keys starting with the (lowercased) input.

        Args:
            partial_query: Prefix typed so far; shorter than
                ``suggestion_min_length`` yields no suggestions
            limit: Maximum suggestions; defaults to ``suggestion_limit``

        Returns:
            Headword keys first, then romanization keys, deduplicated
        """
        if limit is None:
            limit = self.config.suggestion_limit
        if len(partial_query) < self.config.suggestion_min_length:
            return []

        index = await self.engine.ensure_loaded()
        lower_query = partial_query.lower()

        suggestions: Dict[str, None] = {}
        for mapping in (index.word_index, index.romanization_index):
            for key in mapping:
                if key.lower().startswith(lower_query):
                    suggestions[key] = None
        return list(suggestions)[:limit]

    # Filters

    async def get_words_by_category(self, category: str) -> List[Entry]:
        """Entries whose category equals ``category`` (case-sensitive)."""
        return [entry for entry in await self.load() if entry.category == category]

    async def get_words_by_frequency(self, frequency: Union[Frequency, str]) -> List[Entry]:
        """Entries with the given frequency; an unknown frequency matches nothing."""
        return [entry for entry in await self.load() if entry.frequency == frequency]

    async def get_words_by_part_of_speech(self, part_of_speech: str) -> List[Entry]:
        """Entries whose part-of-speech tag equals ``part_of_speech``."""
        return [entry for entry in await self.load() if entry.part_of_speech == part_of_speech]

    async def get_random_words(self, count: Optional[int] = None) -> List[Entry]:
        """Random entries without replacement; ``count`` defaults to ``random_sample_size``."""
        await self.engine.ensure_loaded()
        return self.engine.random_entries(count)

    async def get_available_categories(self) -> List[str]:
        """Distinct non-empty categories, sorted."""
        return sorted({entry.category for entry in await self.load() if entry.category})

    async def get_available_frequencies(self) -> List[Frequency]:
        """Frequencies present in the data, most common first."""
        present = {entry.frequency for entry in await self.load()}
        return [frequency for frequency in Frequency.ordered() if frequency in present]

    # Housekeeping

    def clear_search_cache(self) -> None:
        """Drop every cached ranking."""
        self.engine.clear_cache()

    def get_search_stats(self) -> SearchStats:
        """Entry count, index key count and cache usage."""
        return self.engine.stats()
