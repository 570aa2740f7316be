"""Command-line option handling shared by workflow executables."""

from .cli_utils import __version__, create_parser, parse_known, parse_workspace

__all__ = ["__version__", "create_parser", "parse_known", "parse_workspace"]
