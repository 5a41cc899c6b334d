"""
blobretain

Groups the blobs of a storage container by base name, keeps the newest files of
each group, reports the rest and can delete them.
"""

from .config import RetentionConfig, RetentionOrder, StorageConfig
from .core import (
    FileRecord,
    GroupingResult,
    RetentionPlan,
    RetentionSplit,
    derive_group_key,
    earliest_modified,
    group_records,
    order_groups,
    partition,
    plan_retention,
)
from .pipeline import RetentionPipeline
from .remover import remove_files

__version__ = "1.0.0"

__all__ = [
    "RetentionConfig",
    "RetentionOrder",
    "StorageConfig",
    "FileRecord",
    "GroupingResult",
    "RetentionPlan",
    "RetentionSplit",
    "derive_group_key",
    "earliest_modified",
    "group_records",
    "order_groups",
    "partition",
    "plan_retention",
    "RetentionPipeline",
    "remove_files",
]
