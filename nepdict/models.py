"""Core models for the nepdict dictionary search engine."""

from typing import Dict, List, Optional
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict

from . import constants


class Frequency(str, Enum):
    """How common a word is in everyday Nepali."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @classmethod
    def ordered(cls) -> List["Frequency"]:
        """Frequencies from most to least common."""
        return [cls.HIGH, cls.MEDIUM, cls.LOW]


class SearchField(str, Enum):
    """Fields of an entry that a query can match against."""

    WORD = "word"
    ROMANIZATION = "romanization"
    DEFINITIONS = "definitions"
    CATEGORY = "category"
    EXAMPLES = "examples"


DEFAULT_SEARCH_FIELDS = [
    SearchField.WORD,
    SearchField.ROMANIZATION,
    SearchField.DEFINITIONS,
    SearchField.CATEGORY,
]

ADVANCED_SEARCH_FIELDS = [
    SearchField.WORD,
    SearchField.ROMANIZATION,
    SearchField.DEFINITIONS,
]


class Entry(BaseModel):
    """A single dictionary record.

    ``word`` is Devanagari and is never case-folded. ``romanization`` keeps
    its original casing here and is lowercased only for indexing and
    comparison.
    """

    word: str = Field(min_length=1, description="Devanagari headword")
    romanization: str = Field(description="Latin-script transliteration")
    part_of_speech: str = Field(description="Free-text part-of-speech tag")
    definitions: List[str] = Field(default_factory=list)
    examples: List[str] = Field(default_factory=list)
    examples_romanized: List[str] = Field(default_factory=list)
    examples_english: List[str] = Field(default_factory=list)
    frequency: Frequency = Frequency.MEDIUM
    category: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class FieldScores(BaseModel):
    """Per-field match scores; ``None`` means the field did not score."""

    word: Optional[float] = None
    romanization: Optional[float] = None
    definitions: Optional[float] = None
    category: Optional[float] = None
    examples: Optional[float] = None

    def get(self, field: SearchField) -> Optional[float]:
        return getattr(self, field.value)

    def total(self) -> float:
        """Sum of all scores that were recorded."""
        return sum(
            score for score in (self.get(field) for field in SearchField)
            if score is not None
        )


class FieldHighlights(BaseModel):
    """Per-field text with matches wrapped in highlight markers."""

    word: Optional[str] = None
    romanization: Optional[str] = None
    definitions: Optional[str] = None
    category: Optional[str] = None
    examples: Optional[str] = None

    def get(self, field: SearchField) -> Optional[str]:
        return getattr(self, field.value)


class MatchInfo(BaseModel):
    """Why a record was returned for a query."""

    matched_fields: List[SearchField] = Field(default_factory=list)
    scores: FieldScores = Field(default_factory=FieldScores)
    highlights: FieldHighlights = Field(default_factory=FieldHighlights)

    @property
    def total_score(self) -> float:
        return self.scores.total()

    @property
    def is_exact(self) -> bool:
        """True when word, romanization or definitions hit the exact tier."""
        scores = self.scores
        return (
            (scores.word or 0) >= constants.WORD_EXACT_SCORE
            or (scores.romanization or 0) >= constants.ROMANIZATION_EXACT_SCORE
            or (scores.definitions or 0) >= constants.DEFINITION_WORD_SCORE
        )


class SearchResult(BaseModel):
    """A ranked search hit: the entry plus its match metadata."""

    entry: Entry
    match_info: MatchInfo = Field(default_factory=MatchInfo)

    model_config = ConfigDict(frozen=True)


class AdvancedSearchOptions(BaseModel):
    """Criteria for a multi-criteria search."""

    query: Optional[str] = None
    category: Optional[str] = None
    frequency: Optional[str] = None  # unknown values match nothing
    part_of_speech: Optional[str] = None
    exact_match: bool = False
    fuzzy_threshold: float = Field(default=constants.FUZZY_THRESHOLD, ge=0.0, le=1.0)
    search_fields: List[SearchField] = Field(
        default_factory=lambda: list(ADVANCED_SEARCH_FIELDS)
    )


class SearchStats(BaseModel):
    """Snapshot of engine size and cache usage."""

    total_entries: int = 0
    index_size: int = 0
    cache_size: int = 0
    cache_hits: int = 0
    cache_misses: int = 0


class DataConfig(BaseModel):
    """Where dictionary records come from."""

    data_dir: str = constants.DEFAULT_DATA_DIR
    sources: List[str] = Field(default_factory=lambda: list(constants.DEFAULT_SOURCE_FILES))


class SearchConfig(BaseModel):
    """Result caps and thresholds for searching."""

    max_results: int = Field(default=constants.MAX_SEARCH_RESULTS, ge=1)
    advanced_max_results: int = Field(default=constants.MAX_ADVANCED_RESULTS, ge=1)
    similar_max_results: int = Field(default=constants.MAX_SIMILAR_RESULTS, ge=1)
    fuzzy_threshold: float = Field(default=constants.FUZZY_THRESHOLD, ge=0.0, le=1.0)
    suggestion_limit: int = Field(default=constants.DEFAULT_SUGGESTION_LIMIT, ge=1)
    suggestion_min_length: int = Field(default=constants.MIN_SUGGESTION_LENGTH, ge=0)
    random_sample_size: int = Field(default=constants.DEFAULT_RANDOM_SAMPLE_SIZE, ge=0)


class CacheConfig(BaseModel):
    """Result cache settings."""

    enabled: bool = True
    max_entries: int = Field(default=constants.DEFAULT_CACHE_MAX_ENTRIES, ge=1)


class LoggingConfig(BaseModel):
    """Logging settings."""

    format: str = "text"
    level: str = "INFO"
    log_file: Optional[str] = None


class NepdictConfig(BaseModel):
    """Complete nepdict configuration."""

    data: DataConfig = Field(default_factory=DataConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def field_list(fields: Optional[List[SearchField]]) -> List[SearchField]:
    """Normalize an optional field list, deduplicating while keeping order."""
    if not fields:
        return list(DEFAULT_SEARCH_FIELDS)
    seen: Dict[SearchField, None] = {}
    for field in fields:
        seen[SearchField(field)] = None
    return list(seen)
