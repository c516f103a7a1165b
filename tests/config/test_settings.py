"""Tests for runtime settings helpers."""

from pytest_mock import MockerFixture

from zsnapfree.config.settings import DEFAULT_ZFS_BINARY, Settings, resolve_zfs_binary


def test_settings_defaults() -> None:
    settings = Settings()

    assert settings.zfs_binary == DEFAULT_ZFS_BINARY
    assert settings.target is None
    assert not settings.recursive
    assert settings.use_dry_run


def test_resolve_zfs_binary_looks_up_bare_names(mocker: MockerFixture) -> None:
    which = mocker.patch("zsnapfree.config.settings.shutil.which", return_value="/usr/sbin/zfs")

    assert resolve_zfs_binary(None) == "/usr/sbin/zfs"
    which.assert_called_once_with("zfs")


def test_resolve_zfs_binary_keeps_unknown_names(mocker: MockerFixture) -> None:
    _ = mocker.patch("zsnapfree.config.settings.shutil.which", return_value=None)

    assert resolve_zfs_binary("zfs-test") == "zfs-test"


def test_resolve_zfs_binary_uses_explicit_paths(mocker: MockerFixture) -> None:
    which = mocker.patch("zsnapfree.config.settings.shutil.which")

    assert resolve_zfs_binary("/opt/zfs/bin/zfs") == "/opt/zfs/bin/zfs"
    which.assert_not_called()
