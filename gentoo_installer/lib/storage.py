from __future__ import annotations

import logging
from dataclasses import dataclass

from ..errors import ConfigError
from ..logging_utils import success
from .command import run_cmd

logger = logging.getLogger(__name__)

# sfdisk script: 1 GiB ESP, 4 GiB swap, root takes the rest.
GPT_LAYOUT = "size=1G, type=U\nsize=4G, type=S\nsize=+\n"


@dataclass(frozen=True)
class PartitionSet:
    efi: str
    swap: str
    root: str


def partition_paths(disk: str) -> PartitionSet:
    """Partition N is the disk path with the digit N appended.

    Devices whose names already end in a digit (nvme0n1, mmcblk0) need a "p"
    infix instead; those are rejected rather than guessed.
    """

    if not disk or disk[-1].isdigit():
        raise ConfigError(
            f"Unsupported disk name {disk!r}: partition names are formed by appending a digit",
            key="disk",
        )
    return PartitionSet(efi=f"{disk}1", swap=f"{disk}2", root=f"{disk}3")


def partition_disk(disk: str, *, dry_run: bool = False) -> PartitionSet:
    """Wipe all signatures and write a fresh GPT with EFI, swap and root."""

    parts = partition_paths(disk)
    logger.info("Partitioning disk=%s", disk)

    run_cmd(["wipefs", "--all", disk], dry_run=dry_run)
    run_cmd(["sfdisk", "--label=gpt", disk], input_text=GPT_LAYOUT, dry_run=dry_run)

    success(logger, "Disk partitioned successfully.")
    return parts


def format_partitions(parts: PartitionSet, *, dry_run: bool = False) -> None:
    run_cmd(["mkfs.fat", "-F32", parts.efi], dry_run=dry_run)
    run_cmd(["mkswap", parts.swap], dry_run=dry_run)
    run_cmd(["mkfs.btrfs", "-f", parts.root], dry_run=dry_run)
    success(logger, "Formatted %s (vfat), %s (swap), %s (btrfs)", parts.efi, parts.swap, parts.root)
