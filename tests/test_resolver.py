"""Tests for profile resolution."""

from types import SimpleNamespace

from bacman.config.resolver import (
    effective_profile,
    extract_paths,
    merge_enabled,
    merge_fields,
    resolve_backup_paths,
)
from bacman.config.schema import (
    BackupPath,
    Config,
    GlobalConfig,
    Profile,
    ResolvedBackupPath,
)


def _settings(**kwargs):
    values = dict(encrypt=None, backup_method=None, backup_to=None, interval=None)
    values.update(kwargs)
    return SimpleNamespace(**values)


class TestMergeFields:
    """Tests for merge_fields, independent of any document."""

    def test_path_value_wins(self):
        merged = merge_fields(
            _settings(interval="5h", encrypt=False),
            _settings(interval="1d", encrypt=True),
        )
        assert merged["interval"] == "5h"
        assert merged["encrypt"] is False

    def test_profile_fills_gaps(self):
        merged = merge_fields(
            _settings(), _settings(backup_to="/mnt/backup", backup_method=("git",))
        )
        assert merged["backup_to"] == "/mnt/backup"
        assert merged["backup_method"] == ("git",)

    def test_no_profile_leaves_absent(self):
        merged = merge_fields(_settings(interval="1d"), None)
        assert merged == {
            "encrypt": None,
            "backup_method": None,
            "backup_to": None,
            "interval": "1d",
        }

    def test_lists_are_replaced_not_merged(self):
        merged = merge_fields(
            _settings(backup_method=("dropbox",)),
            _settings(backup_method=("local", "git")),
        )
        assert merged["backup_method"] == ("dropbox",)

    def test_false_is_a_value(self):
        merged = merge_fields(_settings(encrypt=False), _settings(encrypt=True))
        assert merged["encrypt"] is False


class TestMergeEnabled:
    """Tests for merge_enabled."""

    def test_enabled_by_default(self):
        assert merge_enabled(None, None) is True

    def test_either_level_disables(self):
        assert merge_enabled(False, None) is False
        assert merge_enabled(None, False) is False
        assert merge_enabled(True, False) is False

    def test_explicit_true(self):
        assert merge_enabled(True, True) is True


class TestEffectiveProfile:
    """Tests for effective_profile."""

    def test_explicit_profile(self):
        daily = Profile(interval="1d")
        weekly = Profile(interval="7d")
        config = Config(
            global_config=GlobalConfig(default_profile="weekly"),
            profiles={"daily": daily, "weekly": weekly},
        )
        assert effective_profile(config, BackupPath("/a", profile="daily")) is daily

    def test_falls_back_to_default(self):
        weekly = Profile(interval="7d")
        config = Config(
            global_config=GlobalConfig(default_profile="weekly"),
            profiles={"weekly": weekly},
        )
        assert effective_profile(config, BackupPath("/a")) is weekly

    def test_dangling_explicit_reference_does_not_use_default(self):
        config = Config(
            global_config=GlobalConfig(default_profile="weekly"),
            profiles={"weekly": Profile(interval="7d")},
        )
        assert effective_profile(config, BackupPath("/a", profile="missing")) is None

    def test_no_profile_and_no_default(self):
        config = Config(profiles={"daily": Profile()})
        assert effective_profile(config, BackupPath("/a")) is None


class TestResolveBackupPaths:
    """Tests for resolve_backup_paths."""

    def test_same_order_and_cardinality(self):
        paths = tuple(BackupPath(f"/data/{i}", profile="nope") for i in range(5))
        resolved = resolve_backup_paths(Config(backup_paths=paths))

        assert [r.path for r in resolved] == [p.path for p in paths]

    def test_empty_document(self):
        assert resolve_backup_paths(Config()) == []

    def test_profile_supplies_methods(self):
        config = Config(
            profiles={"daily": Profile(backup_method=("local",))},
            backup_paths=(BackupPath("/home", profile="daily"),),
        )
        (resolved,) = resolve_backup_paths(config)
        assert resolved.backup_method == ("local",)

    def test_overrides_win_regardless_of_declaration_order(self):
        profile = Profile(
            encrypt=True, backup_method=("git",), backup_to="/mnt", interval="1d"
        )
        config = Config(
            profiles={"p": profile},
            backup_paths=(
                BackupPath(
                    "/home",
                    profile="p",
                    encrypt=False,
                    backup_method=("local",),
                    backup_to="https://example.com/repo.git",
                    interval="30m",
                ),
            ),
        )
        (resolved,) = resolve_backup_paths(config)
        assert resolved == ResolvedBackupPath(
            path="/home",
            encrypt=False,
            backup_method=("local",),
            backup_to="https://example.com/repo.git",
            interval="30m",
            enabled=True,
        )

    def test_no_profile_resolves_to_absent(self):
        config = Config(backup_paths=(BackupPath("/home"),))
        (resolved,) = resolve_backup_paths(config)
        assert resolved == ResolvedBackupPath(path="/home")

    def test_missing_profile_is_not_an_error(self):
        config = Config(backup_paths=(BackupPath("/home", profile="missing"),))
        (resolved,) = resolve_backup_paths(config)
        assert resolved.backup_method is None
        assert resolved.backup_to is None

    def test_default_profile_applies(self):
        config = Config(
            global_config=GlobalConfig(default_profile="daily"),
            profiles={"daily": Profile(interval="1d", enabled=False)},
            backup_paths=(BackupPath("/home"),),
        )
        (resolved,) = resolve_backup_paths(config)
        assert resolved.interval == "1d"
        assert resolved.enabled is False

    def test_resolution_is_repeatable(self):
        config = Config(
            profiles={"daily": Profile(interval="1d")},
            backup_paths=(BackupPath("/home", profile="daily"),),
        )
        first = resolve_backup_paths(config)
        second = resolve_backup_paths(config)
        assert first == second
        assert first is not second


class TestExtractPaths:
    """Tests for extract_paths."""

    def test_all_paths_in_order(self):
        resolved = [
            ResolvedBackupPath("/b"),
            ResolvedBackupPath("/a", enabled=False),
        ]
        assert extract_paths(resolved) == ["/b", "/a"]

    def test_enabled_only(self):
        resolved = [
            ResolvedBackupPath("/b"),
            ResolvedBackupPath("/a", enabled=False),
        ]
        assert extract_paths(resolved, enabled_only=True) == ["/b"]
