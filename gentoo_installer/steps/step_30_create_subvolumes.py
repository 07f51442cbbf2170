from __future__ import annotations

from ..lib.volumes import create_subvolumes
from ..pipeline import InstallContext


class CreateSubvolumesStep:
    step_id = "30_create_subvolumes"

    def run(self, ctx: InstallContext) -> None:
        create_subvolumes(ctx.partitions.root, ctx.mount_point, dry_run=ctx.dry_run)
