"""Grouping and retention engine."""

from .models import FileRecord, GroupingResult, GroupPlan, RetentionPlan, RetentionSplit
from .grouping import derive_group_key, group_records, log_grouping_summary
from .retention import earliest_modified, order_groups, partition, plan_retention

__all__ = [
    "FileRecord",
    "GroupingResult",
    "GroupPlan",
    "RetentionPlan",
    "RetentionSplit",
    "derive_group_key",
    "group_records",
    "log_grouping_summary",
    "earliest_modified",
    "order_groups",
    "partition",
    "plan_retention",
]
