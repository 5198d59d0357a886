"""Sample vocabulary records shared by the test suites."""

import json
from pathlib import Path
from typing import Any, Dict, List

from nepdict.models import CacheConfig, Entry, SearchConfig
from nepdict.search_engine import DictionaryAPI, InMemorySource, RecordStore, SearchEngine
from nepdict.search_engine.loaders import convert_raw_entry


def raw_record(
    word: str,
    romanization: str,
    pos: str,
    definitions: List[str],
    frequency: str = "high",
    category: str = None,
    **extra: Any
) -> Dict[str, Any]:
    """Build a record in the on-disk JSON shape."""
    record = {
        "DevanagriWord": word,
        "romanization": romanization,
        "pos": pos,
        "definitions": definitions,
        "frequency": frequency,
    }
    if category is not None:
        record["category"] = category
    record.update(extra)
    return record


KHANU = raw_record(
    "खानु", "khanu", "verb", ["to eat"], "high", "verbs",
    examples="म भात खान्छु।",
    examplesRomanized="ma bhaat khanchhu.",
    exampleEnglish="I eat rice.",
)

FOOD_RECORDS = [
    raw_record("भात", "bhaat", "noun", ["rice", "cooked rice"], "high", "food"),
    raw_record("दाल", "daal", "noun", ["lentils; lentil soup"], "medium", "food"),
]

SAMPLE_RECORDS = [
    KHANU,
    *FOOD_RECORDS,
    raw_record("पानी", "paani", "noun", ["water"], "high", "nature"),
    raw_record("पिउनु", "piunu", "verb", ["to drink"], "high", "verbs"),
    raw_record("रातो", "raato", "adjective", ["red"], "medium", "colors"),
    raw_record("नमस्ते", "namaste", "interjection", ["hello, greetings"], "high", "general"),
    raw_record("भान्सा कोठा", "bhaansaa kothaa", "noun", ["kitchen"], "low", "household"),
    raw_record("किताब", "kitaab", "noun", ["book"], "medium", "education"),
    raw_record("कितली", "kitali", "noun", ["kettle"], "low", "household"),
]


def sample_entries(records: List[Dict[str, Any]] = None) -> List[Entry]:
    """Convert raw records straight to entries."""
    return [convert_raw_entry(r, "fixture") for r in (SAMPLE_RECORDS if records is None else records)]


def make_engine(
    records: List[Dict[str, Any]] = None,
    search_config: SearchConfig = None,
    cache_config: CacheConfig = None
) -> SearchEngine:
    """Engine over in-memory records; not loaded yet."""
    store = RecordStore([InMemorySource("fixture.json", list(SAMPLE_RECORDS if records is None else records))])
    return SearchEngine(store, search_config=search_config, cache_config=cache_config)


def make_api(records: List[Dict[str, Any]] = None, **kwargs) -> DictionaryAPI:
    return DictionaryAPI(make_engine(records, **kwargs))


def write_data_dir(directory: Path, files: Dict[str, Any]) -> Path:
    """Write JSON payloads (or raw strings) into ``directory``."""
    directory.mkdir(parents=True, exist_ok=True)
    for name, payload in files.items():
        path = directory / name
        if isinstance(payload, str):
            path.write_text(payload, encoding="utf-8")
        else:
            path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
    return directory


__all__ = [
    "KHANU",
    "FOOD_RECORDS",
    "SAMPLE_RECORDS",
    "raw_record",
    "sample_entries",
    "make_engine",
    "make_api",
    "write_data_dir",
]
