"""
pgbatch/__main__.py

Package entry point for running pgbatch as a module:

    python -m pgbatch [--json] [--verbose] [PATH]

This also serves as the target for the console script entry point defined in
pyproject.toml:

    pgbatch [--json] [--verbose] [PATH]
"""

from __future__ import annotations

import sys

from .cli import main as cli_main


def main() -> int:
    """
    Entry point for `python -m pgbatch` and the installed `pgbatch` command.

    Returns:
        Exit code (0 on success).
    """
    return int(cli_main(sys.argv))


if __name__ == "__main__":
    raise SystemExit(main())
