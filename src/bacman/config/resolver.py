"""Profile resolution for backup paths.

Each field resolves path-level first, then from the effective profile,
otherwise it stays unset. Resolution never fails: a profile name that
does not exist is treated as no profile and reported by the validator.
"""

from typing import Any, Optional

from .schema import BackupPath, Config, Profile, ResolvedBackupPath

# Fields subject to path -> profile override precedence
OVERRIDE_FIELDS = ("encrypt", "backup_method", "backup_to", "interval")


def effective_profile(config: Config, backup_path: BackupPath) -> Optional[Profile]:
    """Get the profile that supplies defaults for a backup path.

    An explicit profile reference takes priority over the global default,
    even when it names a profile that is not declared.
    """
    if backup_path.profile is not None:
        return config.get_profile(backup_path.profile)
    return config.get_profile(config.global_config.default_profile)


def merge_fields(overrides: Any, profile: Optional[Any]) -> dict[str, Any]:
    """Merge override fields from a path and its profile.

    Args:
        overrides: Object carrying the path-level values
        profile: Object carrying the profile-level values, or None

    Returns:
        Dict of OVERRIDE_FIELDS to effective values (None when unset)
    """
    merged = {}
    for name in OVERRIDE_FIELDS:
        value = getattr(overrides, name)
        if value is None and profile is not None:
            value = getattr(profile, name)
        merged[name] = value
    return merged


def merge_enabled(path_enabled: Optional[bool], profile_enabled: Optional[bool]) -> bool:
    """A path is enabled unless it or its profile says otherwise."""
    return path_enabled is not False and profile_enabled is not False


def resolve_backup_path(config: Config, backup_path: BackupPath) -> ResolvedBackupPath:
    """Resolve the effective settings for a single backup path."""
    profile = effective_profile(config, backup_path)
    return ResolvedBackupPath(
        path=backup_path.path,
        enabled=merge_enabled(
            backup_path.enabled, profile.enabled if profile else None
        ),
        **merge_fields(backup_path, profile),
    )


def resolve_backup_paths(config: Config) -> list[ResolvedBackupPath]:
    """Resolve every backup path, preserving document order."""
    return [resolve_backup_path(config, bp) for bp in config.backup_paths]


def extract_paths(
    resolved: list[ResolvedBackupPath], enabled_only: bool = False
) -> list[str]:
    """Get the path strings to hand to the filesystem watcher."""
    return [r.path for r in resolved if r.enabled or not enabled_only]
