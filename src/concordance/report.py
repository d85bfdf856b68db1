"""Rendering a sorted concordance for display or export."""

import json
from typing import Any

import yaml

from .builder import Concordance
from .config import DEFAULT_COLUMN_WIDTH, ConcordanceConfig
from .word_entry import WordEntry


def format_entry(
    word: str,
    entry: WordEntry,
    width: int = DEFAULT_COLUMN_WIDTH,
    separator: str = ",",
) -> str:
    """Format one concordance line, e.g. ``the        {2:1,2}``."""
    return f"{word.ljust(width)}{{{entry.frequency}:{entry.formatted_locations(separator)}}}"


def format_report(view: Concordance, config: ConcordanceConfig | None = None) -> str:
    """Render every entry as a text line, in view order."""
    config = config or ConcordanceConfig()
    return "\n".join(
        format_entry(word, entry, config.column_width, config.location_separator)
        for word, entry in view.items()
    )


def to_serializable(view: Concordance) -> list[dict[str, Any]]:
    """Convert a view to plain dicts for JSON/YAML export."""
    return [
        {"word": word, "frequency": entry.frequency, "locations": entry.locations}
        for word, entry in view.items()
    ]


def render(view: Concordance, config: ConcordanceConfig | None = None) -> str:
    """Render a view in the configured output format."""
    config = config or ConcordanceConfig()
    if config.output_format == "json":
        return json.dumps(to_serializable(view), indent=2)
    if config.output_format == "yaml":
        dumped = yaml.safe_dump(to_serializable(view), sort_keys=False, allow_unicode=True)
        return dumped.rstrip("\n")
    return format_report(view, config)


def summarize(view: Concordance) -> str:
    """One-line totals for a view."""
    total = sum(entry.frequency for entry in view.values())
    return f"{len(view)} distinct word(s), {total} occurrence(s)"
