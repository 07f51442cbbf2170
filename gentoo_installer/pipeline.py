from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Protocol, Sequence

from .lib.env import PATHS, Paths
from .lib.storage import PartitionSet, partition_paths
from .profile import InstallProfile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InstallContext:
    """Everything a step needs; built once and never mutated."""

    profile: InstallProfile
    paths: Paths = PATHS
    dry_run: bool = False

    @property
    def partitions(self) -> PartitionSet:
        return partition_paths(self.profile.disk)

    @property
    def mount_point(self) -> str:
        return self.profile.mount_point


class Step(Protocol):
    """A single install step. Steps run once, in order, and raise on failure."""

    step_id: str

    def run(self, ctx: InstallContext) -> None:
        ...


@dataclass(frozen=True)
class PipelineResult:
    ran_steps: List[str]


def run_pipeline(*, ctx: InstallContext, steps: Sequence[Step]) -> PipelineResult:
    """Run steps strictly in order; the first exception aborts the run."""

    ran: List[str] = []
    for step in steps:
        logger.info("Running step %s", step.step_id)
        try:
            step.run(ctx)
        except Exception:
            logger.error("Step %s failed", step.step_id)
            raise
        ran.append(step.step_id)
    return PipelineResult(ran_steps=ran)
