"""Result caching for the dictionary engine."""

from .memory_cache import ResultCache, make_cache_key

__all__ = ["ResultCache", "make_cache_key"]
