"""Shared CLI utilities and argument parser."""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional, Sequence

__version__ = "0.1.0"


def create_parser(prog: Optional[str] = None) -> argparse.ArgumentParser:
    """Create the parser for options every workflow executable accepts.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog=prog,
        description="Run a ciflow workflow",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""Examples:
  # Run locally against a checkout
  python -m my_pipeline --workspace .

Inside GitHub Actions the workspace is read from GITHUB_WORKSPACE and
--workspace is not needed.
        """,
    )
    parser.add_argument(
        "--workspace",
        type=Path,
        help="The root directory of the package (required outside CI)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    return parser


def parse_known(argv: Optional[Sequence[str]] = None) -> tuple:
    """Parse the engine's options, leaving anything else for the workflow.

    Returns:
        ``(namespace, remaining_arguments)``
    """
    parser = create_parser()
    namespace, remaining = parser.parse_known_args(list(argv) if argv is not None else None)
    return namespace, remaining


def parse_workspace(argv: Optional[Sequence[str]] = None) -> Optional[Path]:
    """Return the ``--workspace`` option, or ``None`` if it was not given."""
    namespace, _ = parse_known(argv)
    return namespace.workspace

