from __future__ import annotations

import logging
from typing import List, Sequence

from ..logging_utils import success
from ..profile import InstallProfile
from .command import format_argv, run_cmd

logger = logging.getLogger(__name__)


def handoff_args(profile: InstallProfile) -> List[str]:
    """Positional arguments for the chroot script.

    hostname, username, desktop, then every group, then every package.
    """

    return [
        profile.hostname,
        profile.username,
        profile.desktop,
        *profile.usergroups,
        *profile.packages,
    ]


def run_chroot(mount_point: str, script_path: str, args: Sequence[str], *, dry_run: bool = False) -> None:
    argv = ["chroot", mount_point, "/bin/bash", script_path, *args]
    logger.info("Running chroot command: %s", format_argv(argv))
    run_cmd(argv, dry_run=dry_run)
    success(logger, "Chroot configuration finished.")


def teardown(swap_part: str, mount_point: str, *, dry_run: bool = False) -> None:
    """Deactivate swap, then lazily unmount the whole target tree."""

    logger.info("Cleaning up chroot environment...")
    for argv in (["swapoff", swap_part], ["umount", "-R", "-l", mount_point]):
        r = run_cmd(argv, check=False, dry_run=dry_run)
        if not r.ok:
            logger.warning("%s exited with %d", format_argv(argv), r.returncode)
    success(logger, "Gentoo install completed and unmounted successfully.")
