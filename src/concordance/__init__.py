"""Alphabetical word concordances with sentence locations."""

from .builder import (
    BuildState,
    Concordance,
    ConcordanceBuilder,
    EdgeCase,
    build_concordance,
    build_sorted_view,
    check_edge_case,
    process_token,
    sort_keys,
    to_records,
    tokenize,
)
from .cli import main
from .config import ConcordanceConfig, parse_key_value_args
from .report import format_entry, format_report, render
from .source import SourceError, read_text
from .word_entry import WordEntry

__all__ = [
    "WordEntry",
    "ConcordanceConfig",
    "ConcordanceBuilder",
    "Concordance",
    "BuildState",
    "EdgeCase",
    "tokenize",
    "check_edge_case",
    "process_token",
    "build_concordance",
    "sort_keys",
    "build_sorted_view",
    "to_records",
    "format_entry",
    "format_report",
    "render",
    "read_text",
    "SourceError",
    "parse_key_value_args",
    "main",
]
