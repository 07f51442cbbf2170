from __future__ import annotations

import logging

from ..lib.storage import partition_disk
from ..pipeline import InstallContext

logger = logging.getLogger(__name__)


class PartitionDiskStep:
    step_id = "10_partition_disk"

    def run(self, ctx: InstallContext) -> None:
        parts = partition_disk(ctx.profile.disk, dry_run=ctx.dry_run)
        logger.info("Partitions: efi=%s swap=%s root=%s", parts.efi, parts.swap, parts.root)
