"""
nepdict - Nepali-English dictionary search.

Loads vocabulary records from JSON files, indexes Devanagari headwords,
romanizations, definitions and categories, and serves ranked lookups with
exact, partial and fuzzy matching.
"""

from .models import (
    AdvancedSearchOptions,
    Entry,
    Frequency,
    MatchInfo,
    NepdictConfig,
    SearchField,
    SearchResult,
    SearchStats,
)
from .search_engine import DictionaryAPI, SearchEngine

__version__ = "1.0.0"

__all__ = [
    "DictionaryAPI",
    "SearchEngine",
    "AdvancedSearchOptions",
    "Entry",
    "Frequency",
    "MatchInfo",
    "NepdictConfig",
    "SearchField",
    "SearchResult",
    "SearchStats",
]
