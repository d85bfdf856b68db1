"""Tokenizing text and accumulating the concordance.

Text is lowercased and split into raw tokens. Each token is then folded
into a ``BuildState`` that carries the current sentence number and the
word mapping. Sorting is a separate pass over the finished mapping.
"""

from dataclasses import dataclass, field
from enum import Enum
from functools import reduce

from .config import ConcordanceConfig
from .word_entry import WordEntry

Concordance = dict[str, WordEntry]
Record = tuple[str, int, list[str]]


class EdgeCase(Enum):
    """How a raw token is treated before general word processing."""

    NONE = "none"
    ABBREVIATION = "abbreviation"
    TERMINATOR = "terminator"


@dataclass
class BuildState:
    """Sentence counter and word mapping carried between tokens."""

    sentence: int = 1
    concordance: Concordance = field(default_factory=dict)


def tokenize(text: str, config: ConcordanceConfig | None = None) -> list[str]:
    """Lowercase the text and split it on the configured delimiters.

    Consecutive delimiters produce empty tokens. They are discarded later.
    """
    config = config or ConcordanceConfig()
    return config.split(text.lower())


def check_edge_case(token: str, config: ConcordanceConfig) -> tuple[EdgeCase, str]:
    """Classify a token before general processing.

    Returns:
        The edge case and the token with edge punctuation removed.
    """
    keyword = config.strip_edge(token)
    if keyword in config.abbreviations:
        return EdgeCase.ABBREVIATION, keyword
    if "." in keyword:
        return EdgeCase.TERMINATOR, keyword
    return EdgeCase.NONE, keyword


def normalize_word(token: str, config: ConcordanceConfig) -> str | None:
    """Strip punctuation from a token, or return None if nothing is left."""
    keyword = config.strip_word(token)
    if not keyword or keyword.isspace():
        return None
    return keyword


def record_word(concordance: Concordance, keyword: str, sentence: int) -> None:
    """Insert a new entry or count another occurrence of an existing one."""
    entry = concordance.get(keyword)
    if entry is None:
        concordance[keyword] = WordEntry.create(1, sentence)
    else:
        entry.record(sentence)


def process_token(
    state: BuildState, token: str, config: ConcordanceConfig | None = None
) -> BuildState:
    """Fold one raw token into the state.

    Abbreviations are recorded as-is and never end a sentence. A token
    containing a period is still recorded under the current sentence, and
    the counter moves on for the tokens after it.
    """
    config = config or ConcordanceConfig()
    edge, keyword = check_edge_case(token, config)

    if edge is EdgeCase.ABBREVIATION:
        record_word(state.concordance, keyword, state.sentence)
        return state

    word = normalize_word(token, config)
    if word is not None:
        record_word(state.concordance, word, state.sentence)

    if edge is EdgeCase.TERMINATOR:
        return BuildState(sentence=state.sentence + 1, concordance=state.concordance)
    return state


def build_concordance(text: str, config: ConcordanceConfig | None = None) -> Concordance:
    """Build the unordered word mapping for a document."""
    config = config or ConcordanceConfig()
    final = reduce(
        lambda state, token: process_token(state, token, config),
        tokenize(text, config),
        BuildState(),
    )
    return final.concordance


def sort_keys(concordance: Concordance) -> list[str]:
    """Return the words in ascending ordinal order."""
    return sorted(concordance)


def build_sorted_view(concordance: Concordance, sorted_keys: list[str]) -> Concordance:
    """Clone the entries of ``concordance`` into a new dict ordered by ``sorted_keys``."""
    return {key: concordance[key].copy() for key in sorted_keys}


def to_records(view: Concordance) -> list[Record]:
    """Flatten a view into ``(word, frequency, locations)`` triples."""
    return [(word, entry.frequency, entry.locations) for word, entry in view.items()]


class ConcordanceBuilder:
    """Builds sorted concordances with a fixed configuration."""

    def __init__(self, config: ConcordanceConfig | None = None) -> None:
        self.config = config or ConcordanceConfig()

    def build(self, text: str) -> Concordance:
        """Tokenize and accumulate ``text``, then return the sorted view."""
        concordance = build_concordance(text, self.config)
        return build_sorted_view(concordance, sort_keys(concordance))

    def records(self, text: str) -> list[Record]:
        return to_records(self.build(text))
