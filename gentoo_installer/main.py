from __future__ import annotations

import argparse
import contextlib
import logging
from typing import Optional

from .errors import ConfigError, InstallerError
from .lib.env import PATHS, Paths
from .lib.lock import install_lock
from .lib.privilege import ensure_elevated
from .logging_utils import DEFAULT_LOG_PATH, configure_logging, success
from .pipeline import InstallContext, PipelineResult, run_pipeline
from .profile import InstallProfile, describe_profile, load_profile
from .steps import (
    CreateSubvolumesStep,
    DownloadStage3Step,
    EnableSwapStep,
    ExtractStage3Step,
    FormatPartitionsStep,
    HandoffStep,
    MountSubvolumesStep,
    PartitionDiskStep,
    PrepareChrootStep,
    TeardownStep,
)

logger = logging.getLogger(__name__)


def build_steps():
    return [
        PartitionDiskStep(),
        FormatPartitionsStep(),
        CreateSubvolumesStep(),
        MountSubvolumesStep(),
        EnableSwapStep(),
        DownloadStage3Step(),
        ExtractStage3Step(),
        PrepareChrootStep(),
        HandoffStep(),
        TeardownStep(),
    ]


def prompt_disk(current: str) -> str:
    answer = input(f"Target disk [{current}]: ").strip()
    return answer or current


def run(
    profile: InstallProfile,
    *,
    paths: Paths = PATHS,
    dry_run: bool = False,
) -> PipelineResult:
    """Run every install step against the profile's disk."""

    ctx = InstallContext(profile=profile, paths=paths, dry_run=dry_run)
    # Validates the disk name before anything touches it.
    parts = ctx.partitions
    logger.info("Installing to %s (efi=%s swap=%s root=%s)", profile.disk, parts.efi, parts.swap, parts.root)

    lock = contextlib.nullcontext() if dry_run else install_lock(paths.lock_file)
    with lock:
        result = run_pipeline(ctx=ctx, steps=build_steps())
    return result


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="gentoo-installer")
    p.add_argument("--config", default=PATHS.profile_default, help="Install profile (.toml|.yaml)")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to installer log")
    p.add_argument("--select-disk", action="store_true", help="Prompt for the target disk")
    p.add_argument("--dry-run", action="store_true", help="Log commands without running them")
    p.add_argument("--verbose", action="store_true", help="Log command output")

    args = p.parse_args(argv)

    if not args.dry_run:
        ensure_elevated(argv)

    configure_logging(log_path=args.log, level=logging.DEBUG if args.verbose else logging.INFO)
    if args.dry_run:
        logger.warning("DRY RUN: no command will be executed")
    else:
        logger.info("Running as root!")

    try:
        profile = load_profile(args.config)
        if args.select_disk:
            profile = profile.with_disk(prompt_disk(profile.disk))
        describe_profile(profile)
        result = run(profile, dry_run=bool(args.dry_run))
    except ConfigError as e:
        logger.error("Configuration error%s: %s", f" ({e.key})" if e.key else "", e)
        return 1
    except InstallerError as e:
        logger.error("Error: %s", e)
        return 1

    success(logger, "Completed steps: %s", ", ".join(result.ran_steps))
    return 0
