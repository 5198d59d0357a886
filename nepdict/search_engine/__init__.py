"""
nepdict search engine - record loading, indexing, ranked search and caching.
"""

from .engine import SearchEngine
from .api import DictionaryAPI
from .loaders import RecordStore, JSONFileSource, InMemorySource
from .search import IndexBuilder, SearchIndex, IndexedTextSearchEngine, FuzzyMatcher, similarity
from .cache import ResultCache

__all__ = [
    # Core classes
    "SearchEngine",
    "DictionaryAPI",

    # Loading
    "RecordStore",
    "JSONFileSource",
    "InMemorySource",

    # Indexing and search
    "IndexBuilder",
    "SearchIndex",
    "IndexedTextSearchEngine",
    "FuzzyMatcher",
    "similarity",

    # Caching
    "ResultCache",
]
