"""Configuration system for bacman.

This module provides TOML-based configuration loading, profile
resolution, and validation of declared backup paths.
"""

from .errors import (
    ConfigError,
    LocationError,
    ParseError,
    ReadError,
    ValidationError,
)
from .loader import find_config_file, load_backup_paths, load_config
from .resolver import extract_paths, resolve_backup_paths
from .schema import (
    BackupMethod,
    BackupPath,
    Config,
    GlobalConfig,
    Profile,
    ResolvedBackupPath,
)
from .validator import Violation, collect_violations, validate

__all__ = [
    "BackupMethod",
    "BackupPath",
    "Config",
    "GlobalConfig",
    "Profile",
    "ResolvedBackupPath",
    "load_config",
    "load_backup_paths",
    "find_config_file",
    "resolve_backup_paths",
    "extract_paths",
    "validate",
    "collect_violations",
    "Violation",
    "ConfigError",
    "LocationError",
    "ReadError",
    "ParseError",
    "ValidationError",
]
