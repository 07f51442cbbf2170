from __future__ import annotations

from ..lib.stage3 import extract_archive
from ..pipeline import InstallContext


class ExtractStage3Step:
    step_id = "55_extract_stage3"

    def run(self, ctx: InstallContext) -> None:
        extract_archive(ctx.mount_point, paths=ctx.paths, dry_run=ctx.dry_run)
