"""Inverted indexes over dictionary entries.

``IndexBuilder.build`` is a pure function of its input: it returns a new,
fully populated ``SearchIndex`` and never touches an existing one, so an
engine can swap indexes in a single assignment.
"""

import re
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, Mapping, Sequence, Set, Tuple

from ... import constants
from ...logging_config import get_logger
from ...models import Entry

logger = get_logger(__name__)

_EMPTY: FrozenSet[int] = frozenset()

_TRAILING_PUNCTUATION = re.compile(r"[.,;:!?]$")
_LEADING_WORD = re.compile(r"^(\w+)[;,:]?\s")
_TOKEN_PUNCTUATION = re.compile(r"[.,;:!?'\"()]")
_WHITESPACE = re.compile(r"\s")
_INFINITIVE_MARKER = "to "

PostingMap = Mapping[str, FrozenSet[int]]


@dataclass(frozen=True)
class SearchIndex:
    """Token to entry-position mappings built from one set of entries."""

    entries: Tuple[Entry, ...] = ()
    word_index: PostingMap = field(default_factory=dict)
    romanization_index: PostingMap = field(default_factory=dict)
    definition_index: PostingMap = field(default_factory=dict)
    definition_exact_index: PostingMap = field(default_factory=dict)
    category_index: PostingMap = field(default_factory=dict)

    @staticmethod
    def lookup(mapping: PostingMap, key: str) -> FrozenSet[int]:
        """Positions stored under ``key``; absent keys yield an empty set."""
        return mapping.get(key, _EMPTY)

    @property
    def size(self) -> int:
        """Total number of keys across all mappings."""
        return (
            len(self.word_index)
            + len(self.romanization_index)
            + len(self.definition_index)
            + len(self.definition_exact_index)
            + len(self.category_index)
        )

    def key_counts(self) -> Dict[str, int]:
        return {
            "word": len(self.word_index),
            "romanization": len(self.romanization_index),
            "definition": len(self.definition_index),
            "definition_exact": len(self.definition_exact_index),
            "category": len(self.category_index),
        }


def exact_definition_keys(definition: str) -> Set[str]:
    """Keys a definition contributes to the definition-exact index.

    A definition that is a single word (ignoring trailing punctuation and a
    leading infinitive "to ") is indexed whole. A definition that opens with
    a word of three or more characters followed by ``;``, ``,``, ``:`` or a
    space also contributes that opening word.
    """
    keys: Set[str] = set()
    trimmed = definition.lower().strip()
    cleaned = _TRAILING_PUNCTUATION.sub("", trimmed).strip()
    if cleaned.startswith(_INFINITIVE_MARKER):
        verb = cleaned[len(_INFINITIVE_MARKER):].strip()
        if verb and not _WHITESPACE.search(verb):
            keys.add(verb)
    if cleaned and not _WHITESPACE.search(cleaned):
        keys.add(cleaned)

    match = _LEADING_WORD.match(trimmed)
    if match and len(match.group(1)) >= constants.MIN_DEFINITION_TOKEN_LENGTH:
        keys.add(match.group(1))
    return keys


def definition_tokens(definition: str) -> Iterable[str]:
    """Lowercase words of a definition long enough to index."""
    stripped = _TOKEN_PUNCTUATION.sub(" ", definition.lower())
    return (
        token for token in stripped.split()
        if len(token) >= constants.MIN_DEFINITION_TOKEN_LENGTH
    )


class IndexBuilder:
    """Builds a ``SearchIndex`` from a sequence of entries."""

    def build(self, entries: Sequence[Entry]) -> SearchIndex:
        word_index: Dict[str, Set[int]] = defaultdict(set)
        romanization_index: Dict[str, Set[int]] = defaultdict(set)
        definition_index: Dict[str, Set[int]] = defaultdict(set)
        definition_exact_index: Dict[str, Set[int]] = defaultdict(set)
        category_index: Dict[str, Set[int]] = defaultdict(set)

        for position, entry in enumerate(entries):
            # Devanagari has no case, index it as written
            self._add_with_subtokens(word_index, entry.word, position)
            self._add_with_subtokens(
                romanization_index, entry.romanization.lower(), position
            )

            for definition in entry.definitions:
                if not definition:
                    continue
                for key in exact_definition_keys(definition):
                    definition_exact_index[key].add(position)
                for token in definition_tokens(definition):
                    definition_index[token].add(position)

            if entry.category:
                category_index[entry.category.lower()].add(position)

        index = SearchIndex(
            entries=tuple(entries),
            word_index=self._freeze(word_index),
            romanization_index=self._freeze(romanization_index),
            definition_index=self._freeze(definition_index),
            definition_exact_index=self._freeze(definition_exact_index),
            category_index=self._freeze(category_index),
        )
        logger.debug("Built search index", extra={"key_counts": index.key_counts()})
        return index

    def _add_with_subtokens(
        self,
        mapping: Dict[str, Set[int]],
        value: str,
        position: int
    ) -> None:
        """Index the whole value and, for multi-word values, each word."""
        if not value:
            return
        mapping[value].add(position)
        parts = value.split()
        if len(parts) > 1:
            for part in parts:
                mapping[part].add(position)

    @staticmethod
    def _freeze(mapping: Dict[str, Set[int]]) -> Dict[str, FrozenSet[int]]:
        return {key: frozenset(positions) for key, positions in mapping.items()}
