"""Data loaders for dictionary records."""

from .json_loader import (
    DataSource,
    JSONFileSource,
    InMemorySource,
    RecordStore,
    convert_raw_entry,
    parse_records,
    sources_from_directory,
)

__all__ = [
    "DataSource",
    "JSONFileSource",
    "InMemorySource",
    "RecordStore",
    "convert_raw_entry",
    "parse_records",
    "sources_from_directory",
]
