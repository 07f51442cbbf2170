from pathlib import Path

import pytest

from gentoo_installer.errors import CommandError
from gentoo_installer.lib.volumes import SUBVOLUMES, create_subvolumes, enable_swap, mount_subvolumes


def test_create_subvolumes_mounts_creates_and_unmounts(runner, tmp_path):
    mnt = str(tmp_path / "gentoo")

    create_subvolumes("/dev/sdX3", mnt)

    assert Path(mnt).is_dir()
    assert runner.calls[0] == ["mount", "/dev/sdX3", mnt]
    assert runner.calls[1:6] == [
        ["btrfs", "subvolume", "create", f"{mnt}/{name}"]
        for name in ["@", "@home", "@var", "@tmp", "@.snapshots"]
    ]
    assert runner.calls[6] == ["umount", "/dev/sdX3"]
    assert len(runner.calls) == 7


def test_create_subvolumes_unmounts_after_failure(runner, tmp_path):
    mnt = str(tmp_path / "gentoo")
    runner.fail_on("btrfs", "subvolume", "create", f"{mnt}/@var")

    with pytest.raises(CommandError):
        create_subvolumes("/dev/sdX3", mnt)

    assert len(runner.matching("btrfs")) == 3
    assert runner.calls[-1] == ["umount", "/dev/sdX3"]


def test_mount_subvolumes_uses_fixed_pairs(runner, tmp_path):
    base = str(tmp_path / "gentoo")

    mount_subvolumes("/dev/sdX3", base)

    mounts = runner.matching("mount")
    assert len(mounts) == 5
    pairs = {(m[2].split("subvol=")[1], m[4]) for m in mounts}
    assert pairs == {
        ("@", base),
        ("@home", f"{base}/home"),
        ("@var", f"{base}/var"),
        ("@tmp", f"{base}/tmp"),
        ("@.snapshots", f"{base}/.snapshots"),
    }
    for m in mounts:
        assert m[2].startswith("noatime,compress=zstd,subvol=")
        assert m[3] == "/dev/sdX3"
        assert Path(m[4]).is_dir()


def test_mount_subvolumes_fails_on_first_error(runner, tmp_path):
    runner.fail_on("mount", "-o", "noatime,compress=zstd,subvol=@var")

    with pytest.raises(CommandError):
        mount_subvolumes("/dev/sdX3", str(tmp_path / "gentoo"))
    assert len(runner.calls) == 3


def test_subvolume_order_is_fixed():
    assert [name for name, _ in SUBVOLUMES] == ["@", "@home", "@var", "@tmp", "@.snapshots"]


def test_enable_swap_failure_is_not_fatal(runner):
    runner.fail_on("swapon")

    assert enable_swap("/dev/sdX2") is False
    assert runner.calls == [["swapon", "/dev/sdX2"]]


def test_enable_swap(runner):
    assert enable_swap("/dev/sdX2") is True
