from __future__ import annotations

from ..lib.storage import format_partitions
from ..pipeline import InstallContext


class FormatPartitionsStep:
    step_id = "20_format_partitions"

    def run(self, ctx: InstallContext) -> None:
        format_partitions(ctx.partitions, dry_run=ctx.dry_run)
