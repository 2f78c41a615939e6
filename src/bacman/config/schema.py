"""Configuration schema definitions using dataclasses.

Mirrors the TOML document exactly as authored. No defaults are inferred
here: an absent field is ``None`` at every level.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional


class BackupMethod(str, Enum):
    """Supported backup methods."""

    LOCAL = "local"
    GIT = "git"
    GDRIVE = "gdrive"
    PDRIVE = "pdrive"
    DROPBOX = "dropbox"

    @classmethod
    def parse(cls, value: str) -> "BackupMethod":
        """Look up a method by name, ignoring case.

        Raises:
            ValueError: If the name is not a known method
        """
        return cls(value.lower())


@dataclass(frozen=True)
class GlobalConfig:
    """Global configuration settings.

    Attributes:
        default_profile: Profile applied to paths without an explicit one
    """

    default_profile: Optional[str] = None


@dataclass(frozen=True)
class Profile:
    """Named bundle of defaults for backup paths.

    Attributes:
        encrypt: Whether backups are encrypted
        backup_method: Ordered backup method names (e.g. "local", "git")
        backup_to: Destination, local path or remote (git@..., https://...)
        interval: Schedule interval (e.g. "1d", "6h", "30m")
        enabled: Set to False to disable every path using this profile
    """

    encrypt: Optional[bool] = None
    backup_method: Optional[tuple[str, ...]] = None
    backup_to: Optional[str] = None
    interval: Optional[str] = None
    enabled: Optional[bool] = None


@dataclass(frozen=True)
class BackupPath:
    """A declared filesystem location to protect.

    Attributes:
        path: Filesystem path to watch and back up
        profile: Name of the profile to take defaults from
        encrypt: Overrides the profile's encrypt
        backup_method: Overrides the profile's backup methods (not merged)
        backup_to: Overrides the profile's destination
        interval: Overrides the profile's interval
        enabled: Set to False to disable this path
    """

    path: str
    profile: Optional[str] = None
    encrypt: Optional[bool] = None
    backup_method: Optional[tuple[str, ...]] = None
    backup_to: Optional[str] = None
    interval: Optional[str] = None
    enabled: Optional[bool] = None


@dataclass(frozen=True)
class ResolvedBackupPath:
    """Effective settings for a backup path after profile resolution.

    Fields still ``None`` were not specified at any level.
    """

    path: str
    encrypt: Optional[bool] = None
    backup_method: Optional[tuple[str, ...]] = None
    backup_to: Optional[str] = None
    interval: Optional[str] = None
    enabled: bool = True

    @property
    def methods(self) -> tuple[BackupMethod, ...]:
        """Resolved backup methods as enum members.

        Only meaningful on validated configurations; unknown names raise
        ValueError.
        """
        return tuple(BackupMethod.parse(m) for m in self.backup_method or ())


@dataclass(frozen=True)
class Config:
    """Root configuration object.

    Attributes:
        global_config: Global settings
        profiles: Profiles keyed by name (read-only mapping when parsed)
        backup_paths: Declared backup paths in document order
    """

    global_config: GlobalConfig = field(default_factory=GlobalConfig)
    profiles: Mapping[str, Profile] = field(
        default_factory=lambda: MappingProxyType({})
    )
    backup_paths: tuple[BackupPath, ...] = ()

    def get_profile(self, name: Optional[str]) -> Optional[Profile]:
        """Get a profile by name, or None if unset or not declared."""
        if name is None:
            return None
        return self.profiles.get(name)
