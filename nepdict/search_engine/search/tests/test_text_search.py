"""Tests for tiered multi-field search."""

import pytest

from nepdict.models import FieldScores, MatchInfo, SearchField, SearchResult
from nepdict.tests.fixtures.dictionary_fixtures import (
    FOOD_RECORDS,
    KHANU,
    raw_record,
    sample_entries,
)

from ..indexer import IndexBuilder
from ..text_search import IndexedTextSearchEngine, highlight_match, rank_key


def build_index(records=None):
    return IndexBuilder().build(sample_entries(records))


class TestHighlighting:

    def test_case_insensitive_keeps_original_text(self):
        assert highlight_match("Namaste", "nama") == "<mark>Nama</mark>ste"

    def test_every_occurrence_wrapped(self):
        assert highlight_match("rice and rice", "rice") == "<mark>rice</mark> and <mark>rice</mark>"

    def test_regex_characters_are_literal(self):
        assert highlight_match("a+b", "+") == "a<mark>+</mark>b"


class TestSingleEntryScoring:
    """Scores for one verb entry, field by field."""

    @pytest.fixture
    def index(self):
        return build_index([raw_record("खानु", "khanu", "verb", ["to eat"], "high")])

    @pytest.fixture
    def engine(self):
        return IndexedTextSearchEngine()

    def test_romanization_exact(self, engine, index):
        results = engine.search("khanu", index, [SearchField.ROMANIZATION])

        assert len(results) == 1
        info = results[0].match_info
        assert info.scores.romanization == 800
        assert info.matched_fields == [SearchField.ROMANIZATION]
        assert info.highlights.romanization == "<mark>khanu</mark>"
        assert info.is_exact

    def test_definition_exact_through_infinitive(self, engine, index):
        results = engine.search("eat", index, [SearchField.DEFINITIONS])

        assert len(results) == 1
        info = results[0].match_info
        assert info.scores.definitions == 900
        assert info.highlights.definitions == "to <mark>eat</mark>"

    def test_romanization_partial(self, engine, index):
        results = engine.search("kha", index, [SearchField.ROMANIZATION])

        assert len(results) == 1
        info = results[0].match_info
        assert info.scores.romanization == 80
        assert info.highlights.romanization == "<mark>kha</mark>nu"
        assert not info.is_exact

    def test_word_exact(self, engine, index):
        results = engine.search("खानु", index, [SearchField.WORD])
        assert results[0].match_info.scores.word == 1000

    def test_romanization_fuzzy(self, engine, index):
        results = engine.search("khano", index, [SearchField.ROMANIZATION])
        assert results[0].match_info.scores.romanization == pytest.approx(0.8 * 40)

    def test_romanization_query_case_folded(self, engine, index):
        results = engine.search("KHANU", index, [SearchField.ROMANIZATION])
        assert results[0].match_info.scores.romanization == 800

    def test_unrequested_fields_not_scored(self, engine, index):
        results = engine.search("khanu", index, [SearchField.DEFINITIONS])
        assert results == []

    def test_blank_query(self, engine, index):
        assert engine.search("   ", index) == []


class TestExactPrecedence:
    """An exact field hit is never replaced by later partial evidence."""

    @pytest.fixture
    def engine(self):
        return IndexedTextSearchEngine()

    def test_partial_after_exact_is_ignored(self, engine):
        index = build_index([KHANU])
        info = engine.search("khanu khan", index, [SearchField.ROMANIZATION])[0].match_info

        assert info.scores.romanization == 800
        assert info.highlights.romanization == "<mark>khanu</mark>"

    def test_exact_after_partial_takes_over(self, engine):
        index = build_index([KHANU])
        info = engine.search("khan khanu", index, [SearchField.ROMANIZATION])[0].match_info

        assert info.scores.romanization == 800
        assert info.highlights.romanization == "<mark>khanu</mark>"

    def test_subtoken_exact_on_multi_word_romanization(self, engine):
        index = build_index()
        results = engine.search("bhaansaa", index, [SearchField.ROMANIZATION])

        assert [r.entry.romanization for r in results] == ["bhaansaa kothaa"]
        assert results[0].match_info.scores.romanization == 800

    def test_subtoken_exact_on_multi_word_headword(self, engine):
        results = engine.search("कोठा", build_index(), [SearchField.WORD])
        assert results[0].entry.word == "भान्सा कोठा"
        assert results[0].match_info.scores.word == 1000


class TestFieldMatching:

    @pytest.fixture
    def engine(self):
        return IndexedTextSearchEngine()

    def test_definition_partial_scaled_by_similarity(self, engine):
        results = engine.search("lent", build_index(FOOD_RECORDS), [SearchField.DEFINITIONS])

        assert [r.entry.romanization for r in results] == ["daal"]
        # best containing key is "lentil": 1 - 2/6
        assert results[0].match_info.scores.definitions == pytest.approx((1 - 2 / 6) * 60)
        assert not results[0].match_info.is_exact

    def test_definitions_highlight_joined(self, engine):
        results = engine.search("rice", build_index(), [SearchField.DEFINITIONS])

        assert results[0].entry.romanization == "bhaat"
        assert results[0].match_info.scores.definitions == 900
        assert results[0].match_info.highlights.definitions == (
            "<mark>rice</mark> | cooked <mark>rice</mark>"
        )

    def test_category_hits_are_flat_and_inexact(self, engine):
        results = engine.search("food", build_index())

        assert [r.entry.romanization for r in results] == ["bhaat", "daal"]
        for result in results:
            assert result.match_info.matched_fields == [SearchField.CATEGORY]
            assert result.match_info.total_score == 30
            assert not result.match_info.is_exact

    def test_examples_only_when_requested(self, engine):
        index = build_index([KHANU])

        assert engine.search("bhaat", index) == []

        results = engine.search("bhaat", index, [SearchField.EXAMPLES])
        info = results[0].match_info
        assert info.scores.examples == 40
        assert info.highlights.examples == "ma <mark>bhaat</mark> khanchhu."

    def test_result_cap(self, engine):
        records = [raw_record(f"शब्द{i}", f"ram{i}", "noun", ["thing"]) for i in range(20)]
        results = engine.search("ram", build_index(records))
        assert len(results) == 15

    def test_custom_cap(self):
        records = [raw_record(f"शब्द{i}", f"ram{i}", "noun", ["thing"]) for i in range(20)]
        engine = IndexedTextSearchEngine(max_results=5)
        assert len(engine.search("ram", build_index(records))) == 5

    def test_every_headword_finds_itself(self, engine):
        index = build_index()
        for entry in index.entries:
            results = engine.search(entry.word, index, [SearchField.WORD])
            matches = [r for r in results if r.entry == entry]
            assert matches
            assert matches[0].match_info.scores.word >= 1000


class TestRanking:
    """Ordering of ranked results."""

    @staticmethod
    def result(romanization, /, **scores):
        entry = sample_entries([raw_record("शब्द", romanization, "noun", ["thing"])])[0]
        return SearchResult(
            entry=entry,
            match_info=MatchInfo(
                matched_fields=[SearchField(name) for name in scores],
                scores=FieldScores(**scores),
            ),
        )

    def test_exact_before_higher_inexact_total(self):
        inexact = self.result("big", category=5000)
        exact = self.result("small", definitions=600)

        ordered = sorted([inexact, exact], key=rank_key)
        assert [r.entry.romanization for r in ordered] == ["small", "big"]

    def test_total_then_matched_field_count(self):
        low = self.result("low", romanization=40)
        single = self.result("single", romanization=80)
        double = self.result("double", romanization=50, category=30)

        ordered = sorted([low, single, double], key=rank_key)
        assert [r.entry.romanization for r in ordered] == ["double", "single", "low"]
