from __future__ import annotations

from ..lib.volumes import mount_subvolumes
from ..pipeline import InstallContext


class MountSubvolumesStep:
    step_id = "35_mount_subvolumes"

    def run(self, ctx: InstallContext) -> None:
        mount_subvolumes(ctx.partitions.root, ctx.mount_point, dry_run=ctx.dry_run)
