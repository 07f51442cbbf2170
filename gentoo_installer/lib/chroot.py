from __future__ import annotations

import logging
import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from ..logging_utils import success
from .command import run_cmd
from .env import Paths

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileCopySpec:
    source: str
    # Absolute path inside the target tree.
    target: str
    dereference: bool = False
    executable: bool = False


def target_path(mount_point: str, target: str) -> str:
    return f"{mount_point.rstrip('/')}/{target.lstrip('/')}"


def build_copy_specs(
    files_dir: str,
    chroot_script: str,
    *,
    paths: Paths,
    first_boot_script: Optional[str] = None,
    resolv_conf: str = "/etc/resolv.conf",
) -> List[FileCopySpec]:
    """Files copied from the installer tree into the new system.

    Every file under <files_dir>/package.use is copied, in name order.
    """

    base = Path(files_dir)
    specs = [FileCopySpec(str(base / "make.conf"), "/etc/portage/make.conf")]

    use_dir = base / "package.use"
    if use_dir.is_dir():
        for f in sorted(p for p in use_dir.iterdir() if p.is_file()):
            specs.append(FileCopySpec(str(f), f"/etc/portage/package.use/{f.name}"))
    else:
        logger.warning("No package.use directory at %s; skipping USE overrides", use_dir)

    specs += [
        FileCopySpec(str(base / "locale.gen"), "/etc/locale.gen"),
        FileCopySpec(str(base / "hosts"), "/etc/hosts"),
        FileCopySpec(resolv_conf, "/etc/resolv.conf", dereference=True),
        FileCopySpec(chroot_script, paths.chroot_script, executable=True),
    ]
    if first_boot_script:
        specs.append(FileCopySpec(first_boot_script, paths.first_boot_script, executable=True))
    return specs


def write_chroot_vars(disk_ref: str, mount_point: str, *, paths: Paths, dry_run: bool = False) -> Path:
    """Record the disk reference as a shell-sourceable file for the chroot script."""

    p = Path(target_path(mount_point, paths.chroot_vars))
    if dry_run:
        logger.info("Would write %s", p)
        return p
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(f"disk={shlex.quote(disk_ref)}\n", encoding="utf-8")
    logger.info("Wrote %s (disk=%s)", p, disk_ref)
    return p


def copy_into_target(spec: FileCopySpec, mount_point: str, *, dry_run: bool = False) -> None:
    dst = target_path(mount_point, spec.target)
    if not dry_run:
        Path(dst).parent.mkdir(parents=True, exist_ok=True)

    argv = ["cp"]
    if spec.dereference:
        argv.append("--dereference")
    run_cmd([*argv, spec.source, dst], dry_run=dry_run)
    if spec.executable:
        run_cmd(["chmod", "+x", dst], dry_run=dry_run)


def mount_chroot_binds(mount_point: str, *, dry_run: bool = False) -> None:
    # sys and dev are recursive binds marked rslave; run is a plain bind marked slave.
    for argv in [
        ["mount", "--types", "proc", "/proc", f"{mount_point}/proc"],
        ["mount", "--rbind", "/sys", f"{mount_point}/sys"],
        ["mount", "--make-rslave", f"{mount_point}/sys"],
        ["mount", "--rbind", "/dev", f"{mount_point}/dev"],
        ["mount", "--make-rslave", f"{mount_point}/dev"],
        ["mount", "--bind", "/run", f"{mount_point}/run"],
        ["mount", "--make-slave", f"{mount_point}/run"],
    ]:
        run_cmd(argv, dry_run=dry_run)


def prepare_chroot(
    disk_ref: str,
    mount_point: str,
    copy_specs: Sequence[FileCopySpec],
    *,
    paths: Paths,
    dry_run: bool = False,
) -> None:
    """Write chroot variables, copy config files, then bind the host kernel trees.

    Fail-fast: the first failing copy or mount raises and nothing is undone.
    """

    write_chroot_vars(disk_ref, mount_point, paths=paths, dry_run=dry_run)
    for spec in copy_specs:
        copy_into_target(spec, mount_point, dry_run=dry_run)
    mount_chroot_binds(mount_point, dry_run=dry_run)
    success(logger, "Successfully prepared for chroot.")
