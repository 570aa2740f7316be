"""Command-line entry point for running a workflow defined in any importable module.

Usage:
    ciflow run my_pipeline.release:Release --workspace .
"""
from __future__ import annotations

import argparse
import importlib
import logging
import os
import sys
from typing import Optional, Sequence, Type

from .commands.cli_utils import __version__
from .orchestration import Workflow

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="ciflow",
        description="Programmable CI/CD workflow runner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""Examples:
  # Run a workflow class against a local checkout
  ciflow run ci.pipeline:Release --workspace .

  # Options after the target are passed to the workflow
  ciflow run ci.pipeline:Release --workspace . --verbose
        """,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Available commands", required=True)
    run_parser = subparsers.add_parser(
        "run",
        help="Run a workflow",
        description="Import a Workflow subclass and run it as the root workflow",
    )
    run_parser.add_argument("target", help="Workflow to run, as module:ClassName")
    return parser


def load_workflow(target: str) -> Type[Workflow]:
    """Import the workflow class named by ``module:ClassName``.

    Raises:
        ValueError: If the target is malformed or does not name a Workflow subclass
        ImportError: If the module cannot be imported
    """
    module_name, separator, attribute = target.partition(":")
    if not separator or not module_name or not attribute:
        raise ValueError(f"Expected module:ClassName, got {target!r}")

    if os.getcwd() not in sys.path:
        sys.path.insert(0, os.getcwd())

    module = importlib.import_module(module_name)
    workflow = getattr(module, attribute, None)
    if not (isinstance(workflow, type) and issubclass(workflow, Workflow)):
        raise ValueError(f"{target} is not a Workflow subclass")
    return workflow


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entry point.

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()
    args, remaining = parser.parse_known_args(list(argv) if argv is not None else None)

    if args.command == "run":
        try:
            workflow = load_workflow(args.target)
        except (ImportError, ValueError) as e:
            logger.error(f"Cannot load workflow: {e}")
            return 1
        return workflow.main(remaining)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
