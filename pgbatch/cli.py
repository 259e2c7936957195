"""
pgbatch/cli.py

Command-line replay tool for recorded simple-query batches.

Responsibilities:
- Read a JSONL message stream from a file or standard input.
- Classify it into tables and completion counts.
- Print the result units as aligned text tables, or as JSON with --json.

Usage:
    pgbatch [--json] [--verbose] [PATH]
If no PATH is provided (or PATH is '-'), messages are read from stdin.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

from .classifier import process_batches
from .errors import PgBatchError
from .render import format_results
from .stream import parse_messages

DEFAULT_SOURCE = "-"

USAGE = "usage: pgbatch [--json] [--verbose] [PATH]"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(verbose: bool) -> None:
    """Configure root logging on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def run(source: str, as_json: bool = False) -> int:
    """
    Classify one recorded batch and print it.

    Args:
        source: File path, or '-' for stdin.
        as_json: Print a JSON array instead of text tables.

    Returns:
        Process exit code.
    """
    try:
        if source == DEFAULT_SOURCE:
            units = process_batches(parse_messages(getattr(sys.stdin, "buffer", sys.stdin)))
        else:
            with Path(source).open("rb") as f:
                units = process_batches(parse_messages(f))
    except PgBatchError as e:
        print(e, file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Cannot read {source}: {e.strerror}", file=sys.stderr)
        return 1

    if as_json:
        print(json.dumps([u.to_dict() for u in units], indent=2))
    elif units:
        print(format_results(units))
    return 0


def main(argv: list[str]) -> int:
    """
    CLI entrypoint.

    Args:
        argv: sys.argv list.

    Returns:
        Exit code.
    """
    as_json = False
    verbose = False
    paths: list[str] = []
    for arg in argv[1:]:
        if arg == "--json":
            as_json = True
        elif arg in ("-v", "--verbose"):
            verbose = True
        elif arg in ("-h", "--help"):
            print(USAGE)
            return 0
        elif arg.startswith("-") and arg != DEFAULT_SOURCE:
            print(f"Unknown option: {arg}\n{USAGE}", file=sys.stderr)
            return 2
        else:
            paths.append(arg)

    if len(paths) > 1:
        print(USAGE, file=sys.stderr)
        return 2

    setup_logging(verbose)
    return run(paths[0] if paths else DEFAULT_SOURCE, as_json=as_json)


if __name__ == "__main__":
    raise SystemExit(main(sys.argv))
