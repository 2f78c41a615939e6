"""bacman: bacman/__main__.py.

Resolve and validate the backup configuration, then list the paths to
watch.
"""

import argparse
import sys
from typing import Callable, Optional

from . import __version__
from .__logger__ import create_logger
from .cli.common import (
    add_config_args,
    add_verbosity_args,
    create_global_parser,
    get_log_level,
)
from .cli.config_cmd import execute_init, execute_paths, execute_validate

COMMANDS: dict[str, Callable[[argparse.Namespace], int]] = {
    "paths": execute_paths,
    "validate": execute_validate,
    "init": execute_init,
}


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="bacman",
        description="Resolve and validate bacman backup configuration",
    )

    add_verbosity_args(parser)

    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    add_config_args(parser)

    # Subcommands accept the global options too
    global_parser = create_global_parser()
    subparsers = parser.add_subparsers(dest="command", title="commands")
    subparsers.add_parser(
        "paths",
        parents=[global_parser],
        help="Print resolved backup paths (default)",
    )
    subparsers.add_parser(
        "validate",
        parents=[global_parser],
        help="Validate the configuration file",
    )
    init_parser = subparsers.add_parser(
        "init",
        parents=[global_parser],
        help="Print an example configuration",
    )
    init_parser.add_argument(
        "-o",
        "--output",
        metavar="FILE",
        help="Write the example to FILE instead of stdout",
    )

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    create_logger(get_log_level(args))

    return COMMANDS[args.command or "paths"](args)


if __name__ == "__main__":
    sys.exit(main())
