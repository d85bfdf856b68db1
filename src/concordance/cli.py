#!/usr/bin/env python3
"""Concordance CLI."""

import argparse
import sys
from pathlib import Path

import yaml

from .builder import ConcordanceBuilder
from .config import OUTPUT_FORMATS, ConcordanceConfig, parse_key_value_args
from .report import render, summarize
from .source import SourceError, read_text

PROMPT = "Enter full path of arbitrary text file to process: "


def main() -> int:
    """Build and print a concordance."""
    parser = argparse.ArgumentParser(
        description="Build an alphabetical concordance of a text document",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s book.txt                          # Print concordance
  %(prog)s                                   # Prompt for the file path
  %(prog)s https://example.com/book.txt      # Download and process
  %(prog)s book.txt --format json -o out.json
  %(prog)s book.txt --config concordance.yml
  %(prog)s book.txt --set column_width=30 abbreviations=i.e.,e.g.
        """,
    )

    parser.add_argument(
        "source",
        nargs="?",
        help="Path or HTTP(S) URL of the text document (prompted for if omitted)",
    )
    parser.add_argument("--config", type=Path, metavar="FILE", help="Path to YAML config")
    parser.add_argument(
        "--set",
        nargs="+",
        metavar="KEY=VALUE",
        help="Override config values (e.g., --set column_width=30)",
    )
    parser.add_argument("--format", choices=OUTPUT_FORMATS, help="Output format (default: text)")
    parser.add_argument("-o", "--output", type=Path, metavar="FILE", help="Write to file")
    parser.add_argument("--encoding", default="utf-8", help="Input encoding (default: utf-8)")
    parser.add_argument(
        "--cache-dir",
        type=Path,
        metavar="DIR",
        help="Directory for downloaded documents (default: ./.concordance-cache)",
    )
    parser.add_argument(
        "--summary", action="store_true", help="Print word and occurrence totals to stderr"
    )

    args = parser.parse_args()

    # Load config
    try:
        config = _load_config(args)
    except FileNotFoundError:
        print(f"Error: Config file not found: {args.config}", file=sys.stderr)
        return 1
    except (KeyError, ValueError, OSError, yaml.YAMLError) as e:
        print(f"Error: Invalid configuration: {e}", file=sys.stderr)
        return 1

    source = args.source
    if not source:
        try:
            source = input(PROMPT).strip()
        except EOFError:
            source = ""
    if not source:
        print("Error: No input file given", file=sys.stderr)
        return 1

    try:
        text = read_text(source, cache_dir=args.cache_dir, encoding=args.encoding)
    except FileNotFoundError:
        print(f"Error: File not found: {source}", file=sys.stderr)
        return 1
    except UnicodeDecodeError as e:
        print(f"Error: Could not decode {source} as {args.encoding}: {e}", file=sys.stderr)
        return 1
    except (OSError, SourceError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    view = ConcordanceBuilder(config).build(text)
    output = render(view, config)

    if args.output:
        try:
            args.output.parent.mkdir(parents=True, exist_ok=True)
            args.output.write_text(output + "\n", encoding="utf-8")
        except OSError as e:
            print(f"Error: Could not write {args.output}: {e}", file=sys.stderr)
            return 1
        print(f"Wrote {len(view)} word(s) -> {args.output}")
    elif output:
        print(output)

    if args.summary:
        print(summarize(view), file=sys.stderr)

    return 0


def _load_config(args: argparse.Namespace) -> ConcordanceConfig:
    """Load the YAML config, then apply --set and --format overrides."""
    config = ConcordanceConfig.from_yaml(args.config) if args.config else ConcordanceConfig()

    overrides = parse_key_value_args(args.set) if args.set else {}
    if args.format:
        overrides["output_format"] = args.format
    if overrides:
        config = config.override(overrides)
    return config


if __name__ == "__main__":
    sys.exit(main())
