"""Shared CLI options.

Options are accepted both before and after the command name
(``bacman -c FILE validate`` and ``bacman validate -c FILE``).
"""

import argparse
from pathlib import Path
from typing import Optional


def _defaults(suppress: bool, default):
    # A subcommand must not reset a value given before the command name
    return argparse.SUPPRESS if suppress else default


def add_verbosity_args(
    parser: argparse.ArgumentParser, suppress_defaults: bool = False
) -> None:
    """Add -v/-q/--debug to a parser."""
    group = parser.add_argument_group("Output options")
    for flags, help_text in (
        (("-v", "--verbose"), "Enable verbose output"),
        (("-q", "--quiet"), "Only show warnings and errors"),
        (("--debug",), "Enable debug output"),
    ):
        group.add_argument(
            *flags,
            action="store_true",
            default=_defaults(suppress_defaults, False),
            help=help_text,
        )


def add_config_args(
    parser: argparse.ArgumentParser, suppress_defaults: bool = False
) -> None:
    """Add -c/--config to a parser."""
    parser.add_argument(
        "-c",
        "--config",
        metavar="FILE",
        default=_defaults(suppress_defaults, None),
        help="Path to configuration file (default: config.toml in the "
        "per-user bacman config directory)",
    )


def create_global_parser() -> argparse.ArgumentParser:
    """Create a parent parser carrying the options every command accepts."""
    parser = argparse.ArgumentParser(add_help=False)
    add_verbosity_args(parser, suppress_defaults=True)
    add_config_args(parser, suppress_defaults=True)
    return parser


def get_config_path(args: argparse.Namespace) -> Optional[Path]:
    """Get the configuration file given on the command line, if any."""
    config = getattr(args, "config", None)
    return Path(config) if config else None


def get_log_level(args: argparse.Namespace) -> str:
    """Determine log level from parsed arguments.

    Returns:
        Log level string (DEBUG, INFO, WARNING)
    """
    if getattr(args, "debug", False) or getattr(args, "verbose", False):
        return "DEBUG"
    if getattr(args, "quiet", False):
        return "WARNING"
    return "INFO"
