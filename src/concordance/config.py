"""Configuration parsing for concordance runs."""

import re
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

# Punctuation removed before the sentence/abbreviation check. Period is
# deliberately absent so terminators and abbreviations stay detectable.
DEFAULT_EDGE_PUNCTUATION = ",()!@#$%^&*[]{}~`"

# Punctuation removed from a word before it is recorded
DEFAULT_STRIP_PUNCTUATION = DEFAULT_EDGE_PUNCTUATION + "."

DEFAULT_DELIMITERS = " \r\n"
DEFAULT_ABBREVIATIONS = ("i.e.",)
DEFAULT_COLUMN_WIDTH = 25

OUTPUT_FORMATS = ("text", "json", "yaml")

_STRING_FIELDS = (
    "edge_punctuation",
    "strip_punctuation",
    "delimiters",
    "location_separator",
    "output_format",
)


def _char_class(chars: str) -> re.Pattern[str]:
    """Compile a regex matching any single character from ``chars``."""
    return re.compile("[" + "".join(re.escape(c) for c in chars) + "]")


def _normalize_abbreviations(value: Any) -> list[str]:
    """Accept a list of strings or a comma-separated string."""
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, (list, tuple)) or not all(isinstance(a, str) for a in value):
        raise ValueError(f"abbreviations must be a list of strings, got {value!r}")
    # Input is lowercased before matching, so abbreviations must be too
    return [a.strip().lower() for a in value if a.strip()]


@dataclass
class ConcordanceConfig:
    """Tokenizer and report settings."""

    abbreviations: list[str] = field(default_factory=lambda: list(DEFAULT_ABBREVIATIONS))
    edge_punctuation: str = DEFAULT_EDGE_PUNCTUATION
    strip_punctuation: str = DEFAULT_STRIP_PUNCTUATION
    delimiters: str = DEFAULT_DELIMITERS
    column_width: int = DEFAULT_COLUMN_WIDTH
    location_separator: str = ","
    output_format: str = "text"

    def __post_init__(self) -> None:
        """Normalize and validate settings, then build the matchers."""
        self.abbreviations = _normalize_abbreviations(self.abbreviations)
        for name in _STRING_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, str):
                raise ValueError(f"{name} must be a string, got {value!r}")
        self.edge_punctuation = self.edge_punctuation.replace(".", "")
        self._validate()

        self._edge_pattern = _char_class(self.edge_punctuation) if self.edge_punctuation else None
        self._strip_pattern = (
            _char_class(self.strip_punctuation) if self.strip_punctuation else None
        )
        self._delimiter_pattern = _char_class(self.delimiters)

    def _validate(self) -> None:
        width = self.column_width
        if isinstance(width, bool) or not isinstance(width, int) or width <= 0:
            raise ValueError(f"column_width must be a positive integer, got {width!r}")
        if self.output_format not in OUTPUT_FORMATS:
            raise ValueError(
                f"Unknown output format: {self.output_format!r}. "
                f"Expected one of: {', '.join(OUTPUT_FORMATS)}"
            )
        if not self.delimiters:
            raise ValueError("delimiters must contain at least one character")
        if not self.location_separator:
            raise ValueError("location_separator must not be empty")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ConcordanceConfig":
        """Create ConcordanceConfig from a YAML dict."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise KeyError(f"Unknown config keys: {', '.join(unknown)}")
        return cls(**data)

    @classmethod
    def from_yaml(cls, path: Path) -> "ConcordanceConfig":
        """Load configuration from a YAML file.

        An empty file yields the defaults.
        """
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file must contain a mapping: {path}")
        return cls.from_dict(data)

    def override(self, overrides: dict[str, Any]) -> "ConcordanceConfig":
        """Return a new config with the given values replaced.

        Values are converted to the type of the setting they replace, so
        raw ``--set`` strings can be passed straight through.
        """
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        for key, value in overrides.items():
            if key not in values:
                raise KeyError(f"Unknown config key: {key}")
            values[key] = _coerce(key, values[key], value)
        return ConcordanceConfig(**values)

    def strip_edge(self, token: str) -> str:
        """Trim a token and remove the punctuation checked before tokenizing."""
        token = token.strip()
        if self._edge_pattern is None:
            return token
        return self._edge_pattern.sub("", token).strip()

    def strip_word(self, token: str) -> str:
        """Trim a token and remove all word punctuation, period included."""
        token = token.strip()
        if self._strip_pattern is None:
            return token
        return self._strip_pattern.sub("", token).strip()

    def split(self, text: str) -> list[str]:
        return self._delimiter_pattern.split(text)


def _coerce(key: str, current: Any, value: Any) -> Any:
    """Convert an override value to the type of the current setting."""
    if isinstance(current, int) and not isinstance(current, bool):
        if isinstance(value, str):
            try:
                return int(value)
            except ValueError:
                raise ValueError(f"{key} must be an integer, got {value!r}") from None
        return value
    if isinstance(current, list):
        if isinstance(value, (list, tuple)):
            return list(value)
        return str(value)
    if not isinstance(value, str):
        return str(value)
    return value


def parse_key_value_args(args: list[str]) -> dict[str, str]:
    """Split ``key=value`` arguments into a dict of raw strings.

    Values are typed later by ``ConcordanceConfig.override``.

    Raises:
        ValueError: If an argument has no ``=`` or an empty key.
    """
    result: dict[str, str] = {}
    for arg in args:
        key, sep, value = arg.partition("=")
        if not sep or not key:
            raise ValueError(f"Invalid format: {arg}. Expected key=value")
        result[key.strip()] = value
    return result
