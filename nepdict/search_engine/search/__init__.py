"""Search module for the dictionary engine."""

from .fuzzy_matcher import FuzzyMatcher, similarity
from .indexer import IndexBuilder, SearchIndex
from .text_search import (
    IndexedTextSearchEngine,
    MatchRecord,
    highlight_definitions,
    highlight_match,
)

__all__ = [
    "FuzzyMatcher",
    "similarity",
    "IndexBuilder",
    "SearchIndex",
    "IndexedTextSearchEngine",
    "MatchRecord",
    "highlight_match",
    "highlight_definitions",
]
