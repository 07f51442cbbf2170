from __future__ import annotations

from ..lib.handoff import handoff_args, run_chroot
from ..pipeline import InstallContext


class HandoffStep:
    step_id = "70_handoff"

    def run(self, ctx: InstallContext) -> None:
        run_chroot(
            ctx.mount_point,
            ctx.paths.chroot_script,
            handoff_args(ctx.profile),
            dry_run=ctx.dry_run,
        )
