from __future__ import annotations

import logging

from ..lib.volumes import enable_swap
from ..pipeline import InstallContext

logger = logging.getLogger(__name__)


class EnableSwapStep:
    step_id = "40_enable_swap"

    def run(self, ctx: InstallContext) -> None:
        # Best-effort: the install continues without swap.
        if not enable_swap(ctx.partitions.swap, dry_run=ctx.dry_run):
            logger.warning("Continuing without swap")
