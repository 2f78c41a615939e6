"""Config commands: show watch paths, validate, generate an example."""

import argparse
import logging

from ..config import ConfigError, extract_paths, find_config_file, load_backup_paths
from ..config.loader import generate_example_config, parse_config, read_config_text
from ..config.validator import collect_violations, collect_warnings
from .common import get_config_path

logger = logging.getLogger(__name__)


def execute_paths(args: argparse.Namespace) -> int:
    """Print the resolved paths handed to the watcher.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    try:
        resolved = load_backup_paths(get_config_path(args))
    except ConfigError as e:
        print(f"Configuration error: {e}")
        return 1

    for path in extract_paths(resolved, enabled_only=True):
        print(path)
    return 0


def execute_validate(args: argparse.Namespace) -> int:
    """Validate the configuration file and list every problem."""
    try:
        config_path = find_config_file(get_config_path(args))
        print(f"Validating: {config_path}")
        config = parse_config(read_config_text(config_path))
    except ConfigError as e:
        print(f"Configuration error: {e}")
        return 1

    violations = collect_violations(config)
    warnings = collect_warnings(config)

    if warnings:
        print("")
        print("Warnings:")
        for warning in warnings:
            print(f"  - {warning}")

    if violations:
        print("")
        print(f"Errors ({len(violations)}):")
        for violation in violations:
            print(f"  - {violation}")
        return 1

    print("")
    print("Configuration is valid.")
    print(f"  Profiles: {len(config.profiles)}")
    print(f"  Backup paths: {len(config.backup_paths)}")
    return 0


def execute_init(args: argparse.Namespace) -> int:
    """Generate example configuration."""
    content = generate_example_config()

    output = getattr(args, "output", None)
    if output:
        try:
            with open(output, "w") as f:
                f.write(content)
            print(f"Example configuration written to: {output}")
        except OSError as e:
            print(f"Error writing file: {e}")
            return 1
    else:
        print(content)

    return 0
