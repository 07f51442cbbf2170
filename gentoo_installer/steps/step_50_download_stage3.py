from __future__ import annotations

from ..lib.stage3 import download_archive
from ..pipeline import InstallContext


class DownloadStage3Step:
    step_id = "50_download_stage3"

    def run(self, ctx: InstallContext) -> None:
        download_archive(
            ctx.profile.stage3_url,
            ctx.mount_point,
            paths=ctx.paths,
            timeout_s=ctx.profile.download_timeout,
            dry_run=ctx.dry_run,
        )
