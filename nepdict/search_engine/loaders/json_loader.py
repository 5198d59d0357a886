"""Dictionary record loading from JSON vocabulary files.

A ``RecordStore`` fetches every configured source once, converts raw
records into ``Entry`` objects, and keeps the result for the life of the
process. A source that cannot be read contributes nothing; a record that
lacks a headword, romanization, part of speech or definition list is
skipped. Neither stops the load.
"""

import asyncio
import logging
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Sequence

import aiofiles

from ...error_handling import MalformedRecordError, SourceUnavailableError
from ...logging_config import get_logger, log_error, log_event
from ...models import Entry, Frequency

logger = get_logger(__name__)


class DataSource(Protocol):
    """A named provider of raw dictionary records."""

    name: str

    async def fetch(self) -> Any:
        """Return the decoded JSON payload.

        Raises:
            SourceUnavailableError: If the payload cannot be read or decoded
        """
        ...


class JSONFileSource:
    """Reads one JSON vocabulary file from disk."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self.name = self.path.name

    async def fetch(self) -> Any:
        try:
            async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
                content = await f.read()
        except OSError as e:
            raise SourceUnavailableError(
                f"Failed to read {self.path}: {e}", source_name=self.name
            ) from e

        try:
            return json.loads(content)
        except json.JSONDecodeError as e:
            raise SourceUnavailableError(
                f"Invalid JSON in {self.name}: {e}", source_name=self.name
            ) from e

    def __repr__(self) -> str:
        return f"JSONFileSource({str(self.path)!r})"


class InMemorySource:
    """Serves records that are already decoded."""

    def __init__(self, name: str, records: Any):
        self.name = name
        self.records = records

    async def fetch(self) -> Any:
        return self.records

    def __repr__(self) -> str:
        return f"InMemorySource({self.name!r})"


def sources_from_directory(data_dir: Path, filenames: Sequence[str]) -> List[JSONFileSource]:
    """Build file sources for ``filenames`` under ``data_dir``, keeping their order."""
    return [JSONFileSource(Path(data_dir) / filename) for filename in filenames]


def _as_list(value: Any) -> List[str]:
    """Example fields come as a single string; normalize to a list."""
    if value is None or value == "":
        return []
    if isinstance(value, list):
        return [str(item) for item in value if item]
    return [str(value)]


def convert_raw_entry(raw: Any, source_name: str = "<unknown>") -> Entry:
    """Convert one raw JSON record into an ``Entry``.

    Raises:
        MalformedRecordError: If required fields are missing or mistyped
    """
    if not isinstance(raw, dict):
        raise MalformedRecordError(
            "Record is not an object", source_name=source_name, record=raw
        )

    word = raw.get("DevanagriWord")
    romanization = raw.get("romanization")
    part_of_speech = raw.get("pos")
    definitions = raw.get("definitions")

    missing = [
        name for name, value in (
            ("DevanagriWord", word),
            ("romanization", romanization),
            ("pos", part_of_speech),
        )
        if not value or not isinstance(value, str)
    ]
    if missing:
        raise MalformedRecordError(
            f"Missing required fields: {', '.join(missing)}",
            source_name=source_name,
            record=raw,
        )
    if not isinstance(definitions, list):
        raise MalformedRecordError(
            "Definitions must be a list", source_name=source_name, record=raw
        )

    raw_frequency = raw.get("frequency")
    try:
        frequency = Frequency(raw_frequency)
    except ValueError:
        logger.debug(
            "Unknown frequency, defaulting to medium",
            extra={"source": source_name, "word": word, "frequency": raw_frequency},
        )
        frequency = Frequency.MEDIUM

    category = raw.get("category")

    return Entry(
        word=word,
        romanization=romanization,
        part_of_speech=part_of_speech,
        definitions=[str(d) for d in definitions if d is not None],
        examples=_as_list(raw.get("examples")),
        examples_romanized=_as_list(raw.get("examplesRomanized")),
        examples_english=_as_list(raw.get("exampleEnglish")),
        frequency=frequency,
        category=category if isinstance(category, str) and category else None,
    )


def parse_records(payload: Any, source_name: str) -> List[Entry]:
    """Convert a decoded payload into entries, skipping malformed records."""
    if isinstance(payload, dict) and "items" in payload:
        payload = payload["items"]

    if not isinstance(payload, list):
        logger.warning(
            f"Invalid JSON structure in {source_name}: expected array",
            extra={"source": source_name},
        )
        return []

    entries = []
    for raw in payload:
        try:
            entries.append(convert_raw_entry(raw, source_name))
        except MalformedRecordError as e:
            logger.warning(
                f"Skipping invalid entry in {source_name}: {e}",
                extra={"source": source_name, "error_code": e.error_code},
            )
    return entries


class RecordStore:
    """Loads all sources once and caches the combined entries.

    Entries keep the source enumeration order even though sources are
    fetched concurrently.
    """

    def __init__(self, sources: Sequence[DataSource]):
        self.sources = list(sources)
        self._entries: Optional[List[Entry]] = None
        self._source_counts: Dict[str, int] = {}
        self._lock = asyncio.Lock()

    @property
    def is_loaded(self) -> bool:
        return self._entries is not None

    @property
    def entries(self) -> List[Entry]:
        """Loaded entries; empty until ``load`` has completed."""
        return self._entries if self._entries is not None else []

    @property
    def source_counts(self) -> Dict[str, int]:
        """Number of entries each source contributed to the last load."""
        return dict(self._source_counts)

    async def load(self) -> List[Entry]:
        """Load every source, or return the cached entries."""
        if self._entries is not None:
            return self._entries

        async with self._lock:
            if self._entries is None:
                self._entries = await self._fetch_all()
        return self._entries

    async def reload(self) -> List[Entry]:
        """Discard cached entries and fetch every source again."""
        async with self._lock:
            self._entries = await self._fetch_all()
        return self._entries

    async def _fetch_all(self) -> List[Entry]:
        batches = await asyncio.gather(
            *(self._load_source(source) for source in self.sources)
        )

        entries: List[Entry] = []
        counts: Dict[str, int] = {}
        for source, batch in zip(self.sources, batches):
            counts[source.name] = len(batch)
            entries.extend(batch)
        self._source_counts = counts

        log_event(
            __name__,
            "Dictionary data loaded",
            entry_count=len(entries),
            source_count=len(self.sources),
        )
        return entries

    async def _load_source(self, source: DataSource) -> List[Entry]:
        try:
            payload = await source.fetch()
        except Exception as e:
            # A broken source never aborts the load
            log_error(
                __name__,
                f"Error loading {source.name}",
                e,
                level=logging.WARNING,
                source=source.name,
            )
            return []
        return parse_records(payload, source.name)
