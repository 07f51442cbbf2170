from __future__ import annotations

from ..lib.handoff import teardown
from ..pipeline import InstallContext


class TeardownStep:
    step_id = "90_teardown"

    def run(self, ctx: InstallContext) -> None:
        teardown(ctx.partitions.swap, ctx.mount_point, dry_run=ctx.dry_run)
