from .step_10_partition_disk import PartitionDiskStep
from .step_20_format_partitions import FormatPartitionsStep
from .step_30_create_subvolumes import CreateSubvolumesStep
from .step_35_mount_subvolumes import MountSubvolumesStep
from .step_40_enable_swap import EnableSwapStep
from .step_50_download_stage3 import DownloadStage3Step
from .step_55_extract_stage3 import ExtractStage3Step
from .step_60_prepare_chroot import PrepareChrootStep
from .step_70_handoff import HandoffStep
from .step_90_teardown import TeardownStep

__all__ = [
    "PartitionDiskStep",
    "FormatPartitionsStep",
    "CreateSubvolumesStep",
    "MountSubvolumesStep",
    "EnableSwapStep",
    "DownloadStage3Step",
    "ExtractStage3Step",
    "PrepareChrootStep",
    "HandoffStep",
    "TeardownStep",
]
