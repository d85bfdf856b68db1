"""Frequency and location record for a single word."""

from collections.abc import Iterable
from dataclasses import dataclass, field


@dataclass
class WordEntry:
    """A word's occurrence count and the sentences it occurs in.

    Locations are stored as text, one per occurrence, in order of
    appearance. ``len(locations) == frequency`` holds as long as the entry
    is only changed through ``record``.
    """

    _frequency: int
    _locations: list[str] = field(default_factory=list)

    @classmethod
    def create(cls, frequency: int, location: int | str) -> "WordEntry":
        """Create an entry with a single location."""
        return cls(frequency, [str(location)])

    @classmethod
    def from_locations(cls, frequency: int, locations: Iterable[str]) -> "WordEntry":
        """Create an entry from an existing location sequence.

        The sequence is copied, so the new entry never shares a list with
        its source.
        """
        return cls(frequency, [str(loc) for loc in locations])

    @property
    def frequency(self) -> int:
        return self._frequency

    @property
    def locations(self) -> list[str]:
        return list(self._locations)

    def increment_frequency(self) -> None:
        self._frequency += 1

    def add_location(self, sentence_number: int) -> None:
        self._locations.append(str(sentence_number))

    def record(self, sentence_number: int) -> None:
        """Count one more occurrence in the given sentence."""
        self.increment_frequency()
        self.add_location(sentence_number)

    def formatted_locations(self, separator: str = ",") -> str:
        """Join locations for display, preserving order."""
        return separator.join(self._locations)

    def copy(self) -> "WordEntry":
        return WordEntry.from_locations(self._frequency, self._locations)
