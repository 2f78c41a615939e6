"""Pytest configuration and shared fixtures."""

import pytest


class FakePathChecker:
    """PathChecker that only knows about the paths it was given."""

    def __init__(self, existing=()):
        self.existing = set(existing)
        self.checked = []

    def exists(self, path):
        self.checked.append(path)
        return path in self.existing


@pytest.fixture
def fake_checker():
    """Return a factory for FakePathChecker."""
    return FakePathChecker


@pytest.fixture
def tmp_config_dir(tmp_path):
    """Create a temporary config directory."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def backup_dirs(tmp_path):
    """Create source and destination directories referenced by configs."""
    dirs = {
        "docs": tmp_path / "data" / "docs",
        "projects": tmp_path / "data" / "projects",
        "dest": tmp_path / "dest",
    }
    for d in dirs.values():
        d.mkdir(parents=True)
    return dirs


@pytest.fixture
def sample_config_toml(backup_dirs):
    """Return a sample valid TOML configuration string."""
    return f"""
[global]
default_profile = "daily"

[profiles.daily]
encrypt = false
backup_method = ["local"]
backup_to = "{backup_dirs['dest']}"
interval = "1d"

[profiles.remote]
encrypt = true
backup_method = ["git", "Dropbox"]
backup_to = "git@example.com:me/backups.git"
interval = "6h"

[[backup_paths]]
path = "{backup_dirs['docs']}"

[[backup_paths]]
path = "{backup_dirs['projects']}"
profile = "remote"
interval = "30m"
"""


@pytest.fixture
def minimal_config_toml(backup_dirs):
    """Return a minimal valid TOML configuration string."""
    return f"""
[[backup_paths]]
path = "{backup_dirs['docs']}"
backup_method = ["local"]
backup_to = "https://example.com/repo.git"
"""


@pytest.fixture
def config_file(tmp_config_dir, sample_config_toml):
    """Create a temporary config file with sample content."""
    config_path = tmp_config_dir / "config.toml"
    config_path.write_text(sample_config_toml)
    return config_path


@pytest.fixture
def minimal_config_file(tmp_config_dir, minimal_config_toml):
    """Create a temporary config file with minimal content."""
    config_path = tmp_config_dir / "minimal.toml"
    config_path.write_text(minimal_config_toml)
    return config_path
