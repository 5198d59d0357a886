"""Tiered multi-field search over a ``SearchIndex``.

Each query token is matched against every requested field in three tiers:

- exact: the token is itself an index key
- partial: the token is a substring of a different key
- fuzzy: edit-distance similarity to a key clears the threshold

Evidence accumulates per entry in a ``MatchRecord``. Once a field has an
exact hit for an entry, later partial or fuzzy evidence for that field is
ignored. Results with an exact hit on word, romanization or definitions
rank ahead of everything else, then by total score, then by the number
of matched fields.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterator, List, Optional, Sequence, Set, Tuple

from ... import constants
from ...models import (
    Entry,
    FieldHighlights,
    FieldScores,
    MatchInfo,
    SearchField,
    SearchResult,
    field_list,
)
from .fuzzy_matcher import FuzzyMatcher
from .indexer import PostingMap, SearchIndex


def highlight_match(text: str, token: str) -> str:
    """Wrap every case-insensitive occurrence of ``token`` in ``text``."""
    if not text or not token:
        return text
    pattern = re.compile(re.escape(token), re.IGNORECASE)
    return pattern.sub(
        lambda m: f"{constants.HIGHLIGHT_OPEN}{m.group(0)}{constants.HIGHLIGHT_CLOSE}",
        text,
    )


def highlight_definitions(definitions: Sequence[str], token: str) -> str:
    return constants.DEFINITION_HIGHLIGHT_SEPARATOR.join(
        highlight_match(definition, token) for definition in definitions
    )


@dataclass
class MatchRecord:
    """Match evidence collected for one entry during one query."""

    position: int
    entry: Entry
    matched_fields: Dict[SearchField, None] = field(default_factory=dict)
    scores: Dict[SearchField, float] = field(default_factory=dict)
    highlights: Dict[SearchField, str] = field(default_factory=dict)
    exact_fields: Set[SearchField] = field(default_factory=set)

    def record_exact(self, search_field: SearchField, score: float, highlight: str) -> None:
        self.matched_fields[search_field] = None
        self.exact_fields.add(search_field)
        current = self.scores.get(search_field)
        if current is None or score > current:
            self.scores[search_field] = score
            self.highlights[search_field] = highlight

    def record_inexact(self, search_field: SearchField, score: float, highlight: str) -> None:
        """Record partial or fuzzy evidence unless the field is already exact."""
        if search_field in self.exact_fields:
            return
        self.matched_fields[search_field] = None
        self.scores[search_field] = max(self.scores.get(search_field, 0.0), score)
        self.highlights[search_field] = highlight

    def to_result(self) -> SearchResult:
        return SearchResult(
            entry=self.entry,
            match_info=MatchInfo(
                matched_fields=list(self.matched_fields),
                scores=FieldScores(**{f.value: s for f, s in self.scores.items()}),
                highlights=FieldHighlights(
                    **{f.value: h for f, h in self.highlights.items()}
                ),
            ),
        )


def rank_key(result: SearchResult):
    """Sort key: exact hits first, then total score, then matched field count."""
    info = result.match_info
    return (not info.is_exact, -info.total_score, -len(info.matched_fields))


class IndexedTextSearchEngine:
    """Tiered search over the word, romanization, definition and category indexes."""

    def __init__(
        self,
        max_results: int = constants.MAX_SEARCH_RESULTS,
        fuzzy_threshold: float = constants.FUZZY_THRESHOLD,
        fuzzy_matcher: Optional[FuzzyMatcher] = None
    ):
        self.max_results = max_results
        self.fuzzy_threshold = fuzzy_threshold
        self.fuzzy_matcher = fuzzy_matcher or FuzzyMatcher()

    def search(
        self,
        query_text: str,
        index: SearchIndex,
        fields: Optional[List[SearchField]] = None
    ) -> List[SearchResult]:
        """Run a ranked search.

        Args:
            query_text: Free text; split on whitespace into tokens
            index: Index to read from
            fields: Fields to match; defaults to word, romanization,
                definitions and category

        Returns:
            Ranked results, at most ``max_results`` long
        """
        tokens = query_text.split()
        if not tokens or not index.entries:
            return []

        search_fields = field_list(fields)
        records: Dict[int, MatchRecord] = {}

        for token in tokens:
            lower = token.lower()
            if SearchField.WORD in search_fields:
                self._match_words(token, index, records)
            if SearchField.ROMANIZATION in search_fields:
                self._match_romanizations(lower, index, records)
            if SearchField.DEFINITIONS in search_fields:
                self._match_definitions(lower, index, records)
            if SearchField.CATEGORY in search_fields:
                self._match_categories(lower, index, records)
            if SearchField.EXAMPLES in search_fields:
                self._match_examples(lower, index, records)

        results = [record.to_result() for record in records.values()]
        results.sort(key=rank_key)
        return results[:self.max_results]

    def _record(self, position: int, index: SearchIndex, records: Dict[int, MatchRecord]) -> MatchRecord:
        record = records.get(position)
        if record is None:
            record = MatchRecord(position=position, entry=index.entries[position])
            records[position] = record
        return record

    def _scan_inexact(
        self, token: str, mapping: PostingMap
    ) -> Iterator[Tuple[FrozenSet[int], Optional[float], str, bool]]:
        """Yield (positions, similarity, key, is_partial) for non-exact key hits.

        Partial hits yield no similarity; the key is returned so callers
        that scale partial scores can compute it.
        """
        for key, positions in mapping.items():
            if key == token:
                continue
            if token in key:
                yield positions, None, key, True
                continue
            score = self.fuzzy_matcher.similarity_above(token, key, self.fuzzy_threshold)
            if score is not None:
                yield positions, score, key, False

    def _match_words(self, token: str, index: SearchIndex, records: Dict[int, MatchRecord]) -> None:
        for position in index.lookup(index.word_index, token):
            record = self._record(position, index, records)
            record.record_exact(
                SearchField.WORD,
                constants.WORD_EXACT_SCORE,
                highlight_match(record.entry.word, token),
            )

        for positions, score, _key, partial in self._scan_inexact(token, index.word_index):
            value = constants.WORD_PARTIAL_SCORE if partial else score * constants.WORD_FUZZY_WEIGHT
            for position in positions:
                record = self._record(position, index, records)
                record.record_inexact(
                    SearchField.WORD, value, highlight_match(record.entry.word, token)
                )

    def _match_romanizations(self, token: str, index: SearchIndex, records: Dict[int, MatchRecord]) -> None:
        for position in index.lookup(index.romanization_index, token):
            record = self._record(position, index, records)
            record.record_exact(
                SearchField.ROMANIZATION,
                constants.ROMANIZATION_EXACT_SCORE,
                highlight_match(record.entry.romanization, token),
            )

        for positions, score, _key, partial in self._scan_inexact(token, index.romanization_index):
            if partial:
                value = constants.ROMANIZATION_PARTIAL_SCORE
            else:
                value = score * constants.ROMANIZATION_FUZZY_WEIGHT
            for position in positions:
                record = self._record(position, index, records)
                record.record_inexact(
                    SearchField.ROMANIZATION,
                    value,
                    highlight_match(record.entry.romanization, token),
                )

    def _match_definitions(self, token: str, index: SearchIndex, records: Dict[int, MatchRecord]) -> None:
        for position in index.lookup(index.definition_exact_index, token):
            record = self._record(position, index, records)
            record.record_exact(
                SearchField.DEFINITIONS,
                constants.DEFINITION_EXACT_SCORE,
                highlight_definitions(record.entry.definitions, token),
            )

        for position in index.lookup(index.definition_index, token):
            record = self._record(position, index, records)
            record.record_exact(
                SearchField.DEFINITIONS,
                constants.DEFINITION_WORD_SCORE,
                highlight_definitions(record.entry.definitions, token),
            )

        for positions, score, key, partial in self._scan_inexact(token, index.definition_index):
            if partial:
                value = self.fuzzy_matcher.similarity(token, key) * constants.DEFINITION_PARTIAL_WEIGHT
            else:
                value = score * constants.DEFINITION_FUZZY_WEIGHT
            for position in positions:
                record = self._record(position, index, records)
                record.record_inexact(
                    SearchField.DEFINITIONS,
                    value,
                    highlight_definitions(record.entry.definitions, token),
                )

    def _match_categories(self, token: str, index: SearchIndex, records: Dict[int, MatchRecord]) -> None:
        # Category hits never count as exact; equal and containing keys score alike
        for key, positions in index.category_index.items():
            if token not in key:
                continue
            for position in positions:
                record = self._record(position, index, records)
                record.record_inexact(
                    SearchField.CATEGORY,
                    constants.CATEGORY_MATCH_SCORE,
                    highlight_match(record.entry.category or "", token),
                )

    def _match_examples(self, token: str, index: SearchIndex, records: Dict[int, MatchRecord]) -> None:
        # No index for examples; scan the romanized sentences
        for position, entry in enumerate(index.entries):
            examples = [example for example in entry.examples_romanized if example]
            if not any(token in example.lower() for example in examples):
                continue
            record = self._record(position, index, records)
            record.record_inexact(
                SearchField.EXAMPLES,
                constants.EXAMPLE_MATCH_SCORE,
                constants.DEFINITION_HIGHLIGHT_SEPARATOR.join(
                    highlight_match(example, token) for example in examples
                ),
            )
