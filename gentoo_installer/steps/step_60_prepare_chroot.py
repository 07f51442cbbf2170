from __future__ import annotations

import logging

from ..lib.chroot import build_copy_specs, prepare_chroot
from ..pipeline import InstallContext

logger = logging.getLogger(__name__)


class PrepareChrootStep:
    step_id = "60_prepare_chroot"

    def run(self, ctx: InstallContext) -> None:
        profile = ctx.profile
        specs = build_copy_specs(
            profile.files_dir,
            profile.chroot_script,
            paths=ctx.paths,
            first_boot_script=profile.first_boot_script,
        )
        logger.info("Copying %d files into %s", len(specs), ctx.mount_point)
        # The chroot script mounts this partition at /efi.
        prepare_chroot(ctx.partitions.efi, ctx.mount_point, specs, paths=ctx.paths, dry_run=ctx.dry_run)
