"""Semantic validation of a parsed configuration.

Every rule is checked against the whole document and every violation is
collected before anything is reported. Filesystem lookups go through a
PathChecker so they can be replaced in tests.
"""

import logging
import re
from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol

from .errors import ValidationError
from .resolver import resolve_backup_paths
from .schema import BackupMethod, Config

logger = logging.getLogger(__name__)

VALID_BACKUP_METHODS = frozenset(m.value for m in BackupMethod)
INTERVAL_UNITS = ("d", "h", "m")
LOCAL_PREFIXES = ("/", "./")
REMOTE_PREFIXES = ("git@", "https://")

_DIGIT_RE = re.compile(r"\d")


@dataclass(frozen=True)
class Violation:
    """A single rule violation.

    Attributes:
        entity: Which part of the document is at fault
        field: The offending field
        message: Human readable description
    """

    entity: str
    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.entity}: {self.field}: {self.message}"


class PathChecker(Protocol):
    """Answers whether a path exists."""

    def exists(self, path: str) -> bool: ...


class LocalPathChecker:
    """PathChecker backed by the local filesystem."""

    def exists(self, path: str) -> bool:
        return Path(path).expanduser().exists()


class ViolationCollector:
    """Accumulates violations without stopping at the first one."""

    def __init__(self) -> None:
        self.violations: list[Violation] = []

    def add(self, entity: str, field: str, message: str) -> None:
        logger.debug("Violation: %s: %s: %s", entity, field, message)
        self.violations.append(Violation(entity, field, message))

    def raise_if_any(self) -> None:
        """Raise ValidationError carrying every collected violation."""
        if self.violations:
            raise ValidationError(self.violations)


def is_valid_backup_method(name: str) -> bool:
    """Check a backup method name, ignoring case."""
    return name.lower() in VALID_BACKUP_METHODS


def is_valid_interval(interval: str) -> bool:
    """Check an interval has a digit and ends with a d/h/m unit."""
    return bool(_DIGIT_RE.search(interval)) and interval.endswith(INTERVAL_UNITS)


def is_local_destination(backup_to: str) -> bool:
    return backup_to.startswith(LOCAL_PREFIXES)


# Authored values are rendered with repr() so each violation stays on one line
def _path_entity(index: int, path: str) -> str:
    return f"backup_paths[{index}] {path!r}"


def _profile_entity(name: str) -> str:
    return f"profiles[{name!r}]"


def _check_fields(
    collector: ViolationCollector,
    entity: str,
    settings,
    path_checker: PathChecker,
) -> None:
    """Check backup_method, interval and backup_to values as authored."""
    for method in settings.backup_method or ():
        if not is_valid_backup_method(method):
            collector.add(
                entity,
                "backup_method",
                f"Invalid backup method {method!r}. "
                f"Valid methods: {', '.join(m.value for m in BackupMethod)}",
            )

    if settings.interval is not None and not is_valid_interval(settings.interval):
        collector.add(
            entity,
            "interval",
            f"Invalid interval {settings.interval!r} "
            "(expected a number followed by d, h or m, e.g. '1d')",
        )

    backup_to = settings.backup_to
    if backup_to is None:
        return
    if is_local_destination(backup_to):
        if not path_checker.exists(backup_to):
            collector.add(
                entity, "backup_to", f"Destination {backup_to!r} does not exist"
            )
    elif not backup_to.startswith(REMOTE_PREFIXES):
        collector.add(
            entity,
            "backup_to",
            f"Invalid destination {backup_to!r} "
            "(expected a local path starting with '/' or './', "
            "or a remote starting with 'git@' or 'https://')",
        )


def _check_config(
    collector: ViolationCollector, config: Config, path_checker: PathChecker
) -> None:
    default_profile = config.global_config.default_profile
    if default_profile is not None and default_profile not in config.profiles:
        collector.add(
            "global",
            "default_profile",
            f"Default profile {default_profile!r} is not defined",
        )

    for name, profile in config.profiles.items():
        _check_fields(collector, _profile_entity(name), profile, path_checker)

    for i, backup_path in enumerate(config.backup_paths):
        entity = _path_entity(i, backup_path.path)

        if not path_checker.exists(backup_path.path):
            collector.add(entity, "path", f"Path {backup_path.path!r} does not exist")

        if backup_path.profile is not None and backup_path.profile not in config.profiles:
            collector.add(
                entity, "profile", f"Profile {backup_path.profile!r} is not defined"
            )

        _check_fields(collector, entity, backup_path, path_checker)

    # backup_method and backup_to are optional at each level but required
    # once profiles are applied
    for i, resolved in enumerate(resolve_backup_paths(config)):
        entity = _path_entity(i, resolved.path)
        if resolved.backup_method is None:
            collector.add(
                entity,
                "backup_method",
                "No backup method set on the path or its profile",
            )
        if resolved.backup_to is None:
            collector.add(
                entity, "backup_to", "No destination set on the path or its profile"
            )


def collect_violations(
    config: Config, path_checker: Optional[PathChecker] = None
) -> list[Violation]:
    """Check every rule and return all violations found.

    Args:
        config: Parsed configuration
        path_checker: Existence lookup, defaults to the local filesystem

    Returns:
        List of violations, empty if the configuration is valid
    """
    collector = ViolationCollector()
    _check_config(collector, config, path_checker or LocalPathChecker())
    return collector.violations


def validate(config: Config, path_checker: Optional[PathChecker] = None) -> None:
    """Validate a configuration.

    Raises:
        ValidationError: If any rule is violated, listing every violation
    """
    collector = ViolationCollector()
    _check_config(collector, config, path_checker or LocalPathChecker())
    collector.raise_if_any()


def collect_warnings(config: Config) -> list[str]:
    """Report legal but suspicious configuration."""
    warnings = []

    if not config.backup_paths:
        warnings.append("No backup paths configured")

    counts = Counter(bp.path for bp in config.backup_paths)
    for path, count in counts.items():
        if count > 1:
            warnings.append(f"Backup path {path!r} is declared {count} times")

    for resolved in resolve_backup_paths(config):
        if not resolved.enabled:
            warnings.append(f"Backup path {resolved.path!r} is disabled")

    referenced = {bp.profile for bp in config.backup_paths}
    referenced.add(config.global_config.default_profile)
    for name in config.profiles:
        if name not in referenced:
            warnings.append(f"Profile {name!r} is not used by any backup path")

    return warnings
