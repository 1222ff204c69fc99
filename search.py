#!/usr/bin/env python3
"""CLI for boolean term search."""

import argparse
import logging
import sys
from functools import partial
from typing import List, Optional, Tuple

import config as cfg
from indexer.term_index import open_index
from query_processing.query_parser import search_terms

VALUE_OPTIONS = ("--db", "--log-level")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Boolean search over the term index",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python search.py java                          # Documents containing java
  python search.py java programming              # Both terms (implicit AND)
  python search.py java OR python                # Either term
  python search.py java -coffee                  # java without coffee
  python search.py --db other.db java AND python # Query another index
        """
    )
    parser.add_argument(
        '--db',
        default=cfg.DB_PATH,
        help='Path to the DuckDB term index'
    )
    parser.add_argument(
        '--log-level',
        default=cfg.LOG_LEVEL,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level'
    )
    parser.add_argument(
        'terms',
        nargs='*',
        help='Search terms, AND / OR operators and -excluded terms'
    )
    return parser


def split_arguments(argv: List[str]) -> Tuple[List[str], List[str]]:
    """
    Separate `--` options from the query tokens.

    Excluded terms such as `-coffee` look like options to argparse, so the tokens
    are handed over after a `--` separator with their order intact.
    """
    options, tokens = [], []
    position = 0
    while position < len(argv):
        arg = argv[position]
        position += 1
        if arg == "--":
            tokens.extend(argv[position:])
            break
        if not arg.startswith("--"):
            tokens.append(arg)
            continue
        options.append(arg)
        if arg in VALUE_OPTIONS and position < len(argv):
            options.append(argv[position])
            position += 1
    return options, tokens


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    options, tokens = split_arguments(sys.argv[1:] if argv is None else argv)
    return build_parser().parse_args(options + ["--"] + tokens)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_arguments(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))

    results = search_terms(args.terms, partial(open_index, args.db))
    if results is None:
        print(cfg.NO_TERM_MESSAGE)
        return 0

    for url, score in results.sort():
        print(f"{url}={score}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
