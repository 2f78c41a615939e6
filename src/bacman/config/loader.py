"""TOML configuration loading.

Handles config file discovery, parsing, validation and profile
resolution. Location, read and parse failures stop the pipeline at once;
validation reports every problem in the document.
"""

import logging
import sys
import tomllib
from pathlib import Path
from types import MappingProxyType
from typing import Any, Optional

from platformdirs import user_config_path

from .errors import LocationError, ParseError, ReadError
from .resolver import resolve_backup_paths
from .schema import BackupPath, Config, GlobalConfig, Profile, ResolvedBackupPath
from .validator import PathChecker, collect_warnings, validate

logger = logging.getLogger(__name__)

APP_NAME = "bacman"
CONFIG_FILENAME = "config.toml"


def config_dir() -> Path:
    """Get the per-user configuration directory for bacman.

    ~/.config/bacman on Linux, ~/Library/Application Support/bacman on
    macOS and %APPDATA%\\bacman\\config on Windows.

    Raises:
        LocationError: If the directory cannot be determined
    """
    try:
        path = user_config_path(APP_NAME, appauthor=False, roaming=True)
    except (KeyError, OSError, RuntimeError) as e:
        raise LocationError(f"Cannot determine configuration directory: {e}") from e

    if sys.platform == "win32":
        # Windows keeps config and data apart under the app directory
        path = path / "config"
    return path


def find_config_file(explicit_path: Path | str | None = None) -> Path:
    """Find the configuration file.

    Args:
        explicit_path: Explicitly specified config path (highest priority)

    Returns:
        Path to the config file. Existence is checked when it is read.
    """
    if explicit_path:
        return Path(explicit_path)
    return config_dir() / CONFIG_FILENAME


def read_config_text(path: Path) -> str:
    """Read the configuration file.

    Raises:
        ReadError: If the file is missing or unreadable
    """
    try:
        with open(path, "rb") as f:
            return f.read().decode("utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ReadError(f"Cannot read config file {path}: {e}") from e


def _expect(value: Any, kind: type, where: str) -> Any:
    # bool is a subclass of int, keep them apart
    if value is not None and (
        not isinstance(value, kind) or (kind is not bool and isinstance(value, bool))
    ):
        raise ParseError(f"{where} must be a {kind.__name__}, got {value!r}")
    return value


def _parse_methods(value: Any, where: str) -> Optional[tuple[str, ...]]:
    """Parse backup_method, accepting a bare string as a single method."""
    if value is None:
        return None
    if isinstance(value, str):
        return (value,)
    if not isinstance(value, list) or not all(isinstance(m, str) for m in value):
        raise ParseError(f"{where} must be a list of strings, got {value!r}")
    return tuple(value)


def _parse_settings(data: dict[str, Any], where: str) -> dict[str, Any]:
    """Parse the override fields shared by profiles and backup paths."""
    return {
        "encrypt": _expect(data.get("encrypt"), bool, f"{where}.encrypt"),
        "backup_method": _parse_methods(
            data.get("backup_method"), f"{where}.backup_method"
        ),
        "backup_to": _expect(data.get("backup_to"), str, f"{where}.backup_to"),
        "interval": _expect(data.get("interval"), str, f"{where}.interval"),
        "enabled": _expect(data.get("enabled"), bool, f"{where}.enabled"),
    }


def _parse_table(data: Any, where: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise ParseError(f"{where} must be a table, got {data!r}")
    return data


def _parse_global(data: dict[str, Any]) -> GlobalConfig:
    """Parse global configuration from dict."""
    data = _parse_table(data, "global")
    return GlobalConfig(
        default_profile=_expect(
            data.get("default_profile"), str, "global.default_profile"
        ),
    )


def _parse_profile(name: str, data: dict[str, Any]) -> Profile:
    """Parse profile configuration from dict."""
    where = f"profiles.{name}"
    return Profile(**_parse_settings(_parse_table(data, where), where))


def _parse_backup_path(index: int, data: dict[str, Any]) -> BackupPath:
    """Parse backup path configuration from dict."""
    where = f"backup_paths[{index}]"
    data = _parse_table(data, where)
    if "path" not in data:
        raise ParseError(f"{where} missing required 'path' field")

    return BackupPath(
        path=_expect(data["path"], str, f"{where}.path"),
        profile=_expect(data.get("profile"), str, f"{where}.profile"),
        **_parse_settings(data, where),
    )


def parse_config(text: str) -> Config:
    """Parse TOML text into a Config.

    Missing top-level tables are treated as empty.

    Raises:
        ParseError: If the text is not valid TOML or has the wrong shape
    """
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ParseError(f"Invalid TOML syntax: {e}") from e

    global_config = _parse_global(data.get("global", {}))

    profiles = MappingProxyType(
        {
            name: _parse_profile(name, profile_data)
            for name, profile_data in _parse_table(
                data.get("profiles", {}), "profiles"
            ).items()
        }
    )

    backup_paths_data = data.get("backup_paths", [])
    if not isinstance(backup_paths_data, list):
        raise ParseError(
            f"backup_paths must be an array of tables, got {backup_paths_data!r}"
        )
    backup_paths = tuple(
        _parse_backup_path(i, bp_data) for i, bp_data in enumerate(backup_paths_data)
    )

    return Config(
        global_config=global_config, profiles=profiles, backup_paths=backup_paths
    )


def load_config(
    path: Path | str | None = None, path_checker: Optional[PathChecker] = None
) -> Config:
    """Load and validate configuration from a TOML file.

    Args:
        path: Path to configuration file, defaults to the per-user location
        path_checker: Existence lookup used by validation

    Returns:
        Validated Config object

    Raises:
        ConfigError: If the config cannot be located, read, parsed or validated
    """
    config_path = find_config_file(path)
    logger.debug("Loading configuration from %s", config_path)

    config = parse_config(read_config_text(config_path))
    logger.debug(
        "Parsed %d profile(s) and %d backup path(s)",
        len(config.profiles),
        len(config.backup_paths),
    )

    validate(config, path_checker)

    for warning in collect_warnings(config):
        logger.warning(warning)

    return config


def load_backup_paths(
    path: Path | str | None = None, path_checker: Optional[PathChecker] = None
) -> list[ResolvedBackupPath]:
    """Load the configuration and resolve every backup path.

    Each call reads the file again and returns a new list.

    Raises:
        ConfigError: If the config cannot be located, read, parsed or validated
    """
    resolved = resolve_backup_paths(load_config(path, path_checker))
    logger.info("Resolved %d backup path(s)", len(resolved))
    return resolved


def generate_example_config() -> str:
    """Generate example configuration file content."""
    return """# bacman configuration
# Settings resolve per path: path value, then profile value, then unset.

[global]
default_profile = "daily"

[profiles.daily]
encrypt = false
backup_method = ["local"]   # local, git, gdrive, pdrive, dropbox
backup_to = "/mnt/backup"
interval = "1d"             # number followed by d, h or m

[profiles.remote]
encrypt = true
backup_method = ["git"]
backup_to = "git@example.com:me/backups.git"
interval = "6h"

# Uses the default profile
[[backup_paths]]
path = "/home/me/Documents"

# Uses a named profile with an override
[[backup_paths]]
path = "/home/me/projects"
profile = "remote"
interval = "30m"

# Disabled path
# [[backup_paths]]
# path = "/home/me/Music"
# enabled = false
"""
