from __future__ import annotations

import logging
from pathlib import Path
from typing import Tuple

from ..errors import CommandError
from ..logging_utils import success
from .command import run_cmd

logger = logging.getLogger(__name__)

# (subvolume, path relative to the install root); order is mount order.
SUBVOLUMES: Tuple[Tuple[str, str], ...] = (
    ("@", ""),
    ("@home", "/home"),
    ("@var", "/var"),
    ("@tmp", "/tmp"),
    ("@.snapshots", "/.snapshots"),
)

MOUNT_OPTIONS = "noatime,compress=zstd"


def _ensure_dir(path: str, *, dry_run: bool) -> None:
    if dry_run:
        logger.info("Would create directory %s", path)
        return
    Path(path).mkdir(parents=True, exist_ok=True)


def create_subvolumes(root_part: str, mount_point: str, *, dry_run: bool = False) -> None:
    """Create the btrfs subvolumes on a temporarily mounted root partition.

    The partition is unmounted again whether or not every subvolume was created.
    """

    _ensure_dir(mount_point, dry_run=dry_run)
    run_cmd(["mount", root_part, mount_point], dry_run=dry_run)
    try:
        for name, _ in SUBVOLUMES:
            logger.info("Creating subvolume: %s", name)
            run_cmd(["btrfs", "subvolume", "create", f"{mount_point}/{name}"], dry_run=dry_run)
    finally:
        run_cmd(["umount", root_part], check=False, dry_run=dry_run)
    success(logger, "Created btrfs subvolumes successfully.")


def mount_subvolumes(root_part: str, base_mount: str, *, dry_run: bool = False) -> None:
    for name, suffix in SUBVOLUMES:
        target = base_mount + suffix
        _ensure_dir(target, dry_run=dry_run)
        run_cmd(
            ["mount", "-o", f"{MOUNT_OPTIONS},subvol={name}", root_part, target],
            dry_run=dry_run,
        )
        success(logger, "Mounted subvolume %s to %s", name, target)


def enable_swap(swap_part: str, *, dry_run: bool = False) -> bool:
    """Best-effort swapon; a failure is logged and does not abort the install."""

    try:
        run_cmd(["swapon", swap_part], dry_run=dry_run)
    except CommandError as e:
        logger.error("Failed to activate swap partition %s: %s", swap_part, e)
        return False
    success(logger, "Activated swap partition %s", swap_part)
    return True
