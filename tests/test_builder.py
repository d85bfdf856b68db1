"""Tests for concordance.builder module."""

import pytest

from concordance.builder import (
    BuildState,
    ConcordanceBuilder,
    EdgeCase,
    build_concordance,
    build_sorted_view,
    check_edge_case,
    normalize_word,
    process_token,
    record_word,
    sort_keys,
    to_records,
    tokenize,
)
from concordance.config import ConcordanceConfig

SAMPLE_TEXT = "A quick test, written here. Zebras (and others) were seen!"


def _locations(concordance, word: str) -> list[str]:
    return concordance[word].locations


class TestTokenize:
    """Tests for tokenize function."""

    def test_lowercases_and_splits_on_spaces(self) -> None:
        """Test basic splitting and case folding."""
        assert tokenize("The Dog RAN") == ["the", "dog", "ran"]

    def test_splits_on_carriage_return_and_line_feed(self) -> None:
        """Test that CR and LF are delimiters."""
        assert tokenize("one\r\ntwo\nthree") == ["one", "", "two", "three"]

    def test_consecutive_delimiters_yield_empty_tokens(self) -> None:
        """Test that empty tokens are kept for later filtering."""
        assert tokenize("a  b") == ["a", "", "b"]

    def test_tabs_are_not_delimiters(self) -> None:
        """Test that only the configured delimiters split."""
        assert tokenize("a\tb") == ["a\tb"]


class TestCheckEdgeCase:
    """Tests for check_edge_case function."""

    @pytest.fixture
    def config(self) -> ConcordanceConfig:
        return ConcordanceConfig()

    def test_abbreviation_detected(self, config: ConcordanceConfig) -> None:
        """Test that the literal i.e. is an abbreviation."""
        assert check_edge_case("i.e.", config) == (EdgeCase.ABBREVIATION, "i.e.")

    def test_abbreviation_with_surrounding_punctuation(self, config: ConcordanceConfig) -> None:
        """Test that edge punctuation is removed before matching."""
        assert check_edge_case("(i.e.,", config) == (EdgeCase.ABBREVIATION, "i.e.")

    def test_period_marks_terminator(self, config: ConcordanceConfig) -> None:
        """Test that a token with a period ends a sentence."""
        assert check_edge_case("dog.", config) == (EdgeCase.TERMINATOR, "dog.")

    def test_plain_word_has_no_edge_case(self, config: ConcordanceConfig) -> None:
        """Test that ordinary words pass through."""
        assert check_edge_case("cat,", config) == (EdgeCase.NONE, "cat")


class TestNormalizeWord:
    """Tests for normalize_word function."""

    @pytest.fixture
    def config(self) -> ConcordanceConfig:
        return ConcordanceConfig()

    def test_strips_extended_punctuation(self, config: ConcordanceConfig) -> None:
        """Test that periods and other punctuation are removed."""
        assert normalize_word("[blue].", config) == "blue"

    def test_empty_token_discarded(self, config: ConcordanceConfig) -> None:
        """Test that empty tokens produce no word."""
        assert normalize_word("", config) is None

    def test_punctuation_only_token_discarded(self, config: ConcordanceConfig) -> None:
        """Test that tokens made only of punctuation produce no word."""
        assert normalize_word("...", config) is None
        assert normalize_word("(!)", config) is None

    def test_keeps_unlisted_punctuation(self, config: ConcordanceConfig) -> None:
        """Test that characters outside the strip set survive."""
        assert normalize_word("don't?", config) == "don't?"


class TestProcessToken:
    """Tests for the single-token fold step."""

    def test_plain_word_recorded_at_current_sentence(self) -> None:
        """Test that a plain word keeps the sentence number."""
        state = process_token(BuildState(sentence=3), "cat")

        assert state.sentence == 3
        assert _locations(state.concordance, "cat") == ["3"]

    def test_terminator_recorded_before_advancing(self) -> None:
        """Test that a terminator counts in its own sentence."""
        state = process_token(BuildState(), "end.")

        assert state.sentence == 2
        assert _locations(state.concordance, "end") == ["1"]

    def test_abbreviation_does_not_advance(self) -> None:
        """Test that i.e. keeps the sentence number."""
        state = process_token(BuildState(), "i.e.")

        assert state.sentence == 1
        assert list(state.concordance) == ["i.e."]

    def test_repeated_abbreviation_not_recorded_twice(self) -> None:
        """Test that a repeated i.e. only updates its own entry."""
        state = process_token(BuildState(), "i.e.")
        state = process_token(state, "i.e.")

        assert list(state.concordance) == ["i.e."]
        assert state.concordance["i.e."].frequency == 2

    def test_empty_token_leaves_state_unchanged(self) -> None:
        """Test that empty tokens are tolerated."""
        state = process_token(BuildState(), "")

        assert state.sentence == 1
        assert state.concordance == {}


class TestRecordWord:
    """Tests for record_word function."""

    def test_new_word_created(self) -> None:
        """Test that a new key starts at frequency 1."""
        concordance = {}
        record_word(concordance, "blue", 1)

        assert concordance["blue"].frequency == 1
        assert concordance["blue"].locations == ["1"]

    def test_existing_word_updated(self) -> None:
        """Test that an existing key is incremented."""
        concordance = {}
        record_word(concordance, "blue", 1)
        record_word(concordance, "blue", 2)

        assert concordance["blue"].frequency == 2
        assert concordance["blue"].formatted_locations() == "1,2"


class TestBuildConcordance:
    """Tests for build_concordance function."""

    def test_sentences_tracked(self) -> None:
        """Test that words are placed in the right sentences."""
        concordance = build_concordance("The Dog. The cat ran.")

        assert _locations(concordance, "the") == ["1", "2"]
        assert concordance["the"].frequency == 2
        assert _locations(concordance, "dog") == ["1"]
        assert _locations(concordance, "cat") == ["2"]
        assert _locations(concordance, "ran") == ["2"]

    def test_abbreviation_kept_as_own_key(self) -> None:
        """Test that i.e. is recorded and does not end the sentence."""
        concordance = build_concordance("Note i.e. this matters. Next")

        assert _locations(concordance, "i.e.") == ["1"]
        assert _locations(concordance, "this") == ["1"]
        assert _locations(concordance, "matters") == ["1"]
        assert _locations(concordance, "next") == ["2"]
        assert "ie" not in concordance

    def test_empty_input(self) -> None:
        """Test that empty input yields an empty concordance."""
        assert build_concordance("") == {}

    def test_whitespace_only_input(self) -> None:
        """Test that delimiters alone yield an empty concordance."""
        assert build_concordance("  \r\n \n") == {}

    def test_trailing_punctuation_merges_with_bare_word(self) -> None:
        """Test that 'blue,' and 'blue' share a key."""
        concordance = build_concordance("blue, sky and blue")

        assert concordance["blue"].frequency == 2
        assert _locations(concordance, "blue") == ["1", "1"]

    def test_case_folded(self) -> None:
        """Test that differently-cased words share a key."""
        concordance = build_concordance("Blue BLUE blue")
        assert list(concordance) == ["blue"]
        assert concordance["blue"].frequency == 3

    def test_ellipsis_advances_without_recording(self) -> None:
        """Test that a punctuation-only terminator still ends a sentence."""
        concordance = build_concordance("one ... two")

        assert set(concordance) == {"one", "two"}
        assert _locations(concordance, "two") == ["2"]

    def test_multiline_text(self) -> None:
        """Test that line breaks separate words."""
        concordance = build_concordance("first line.\r\nsecond line.")

        assert _locations(concordance, "line") == ["1", "2"]
        assert _locations(concordance, "second") == ["2"]

    def test_frequency_matches_locations(self) -> None:
        """Test the frequency/locations invariant over a document."""
        concordance = build_concordance(SAMPLE_TEXT + " " + SAMPLE_TEXT)
        for entry in concordance.values():
            assert entry.frequency == len(entry.locations)

    def test_deterministic(self) -> None:
        """Test that building twice gives the same result."""
        first = to_records(build_concordance(SAMPLE_TEXT))
        second = to_records(build_concordance(SAMPLE_TEXT))
        assert first == second

    def test_configured_abbreviation(self) -> None:
        """Test that extra abbreviations behave like i.e."""
        config = ConcordanceConfig(abbreviations=["i.e.", "e.g."])
        concordance = build_concordance("fruit e.g. apples.", config)

        assert _locations(concordance, "e.g.") == ["1"]
        assert _locations(concordance, "apples") == ["1"]

    def test_unconfigured_abbreviation_ends_sentence(self) -> None:
        """Test that e.g. is a terminator by default."""
        concordance = build_concordance("fruit e.g. apples.")

        assert _locations(concordance, "eg") == ["1"]
        assert _locations(concordance, "apples") == ["2"]


class TestSorting:
    """Tests for sort_keys and build_sorted_view."""

    def test_sort_keys_ordinal(self) -> None:
        """Test that keys sort by code point."""
        concordance = build_concordance("zeta alpha 10 2")
        assert sort_keys(concordance) == ["10", "2", "alpha", "zeta"]

    def test_sort_keys_idempotent(self) -> None:
        """Test that sorting a sorted view changes nothing."""
        concordance = build_concordance(SAMPLE_TEXT)
        keys = sort_keys(concordance)
        view = build_sorted_view(concordance, keys)
        assert sort_keys(view) == keys

    def test_sample_first_and_last(self) -> None:
        """Test the ends of the sorted sample."""
        concordance = build_concordance(SAMPLE_TEXT)
        keys = sort_keys(concordance)

        assert len(keys) == 10
        assert keys[0] == "a"
        assert keys[-1] == "zebras"

    def test_sorted_view_preserves_data(self) -> None:
        """Test that frequencies and locations survive the copy."""
        concordance = build_concordance(SAMPLE_TEXT + " a test.")
        view = build_sorted_view(concordance, sort_keys(concordance))

        assert list(view) == sorted(concordance)
        assert sum(e.frequency for e in view.values()) == sum(
            e.frequency for e in concordance.values()
        )
        for word, entry in concordance.items():
            assert view[word].locations == entry.locations

    def test_sorted_view_entries_are_clones(self) -> None:
        """Test that the view does not alias the source entries."""
        concordance = build_concordance("one two")
        view = build_sorted_view(concordance, sort_keys(concordance))
        view["one"].record(5)

        assert concordance["one"].frequency == 1


class TestConcordanceBuilder:
    """Tests for the ConcordanceBuilder facade."""

    def test_build_returns_sorted_view(self) -> None:
        """Test that build returns words in order."""
        view = ConcordanceBuilder().build("The Dog. The cat ran.")
        assert list(view) == ["cat", "dog", "ran", "the"]

    def test_records(self) -> None:
        """Test the driver-facing record triples."""
        records = ConcordanceBuilder().records("The Dog. The cat ran.")

        assert records[0] == ("cat", 1, ["2"])
        assert records[-1] == ("the", 2, ["1", "2"])
