"""
Inter-group ordering and within-group retention policy.
"""

from datetime import datetime
from typing import List, Mapping, Optional, Sequence, Tuple
from loguru import logger

from ..config.settings import RetentionConfig, RetentionOrder
from ..exceptions import ValidationException
from .models import FileRecord, GroupingResult, GroupPlan, RetentionPlan, RetentionSplit

DEFAULT_KEEP_COUNT = 2
DEFAULT_MIN_GROUP_SIZE = 3


def timestamp_sort_key(value: Optional[datetime], missing_last: bool = True) -> tuple:
    """Sort key placing absent timestamps after (or before) every defined one."""
    if value is None:
        return (1,) if missing_last else (0,)
    return (0, value) if missing_last else (1, value)


def earliest_modified(records: Sequence[FileRecord]) -> Optional[datetime]:
    """Minimum defined last_modified in the group, or None when none is defined."""
    earliest = None
    for record in records:
        if record.last_modified is None:
            continue
        # Strict comparison keeps the first-seen value on ties
        if earliest is None or record.last_modified < earliest:
            earliest = record.last_modified
    return earliest


def order_groups(groups: Mapping[str, Sequence[FileRecord]]) -> List[Tuple[str, Sequence[FileRecord]]]:
    """
    Order groups ascending by their earliest timestamp.

    The sort is stable; groups without any timestamp go last, in their original order.
    """
    return sorted(groups.items(), key=lambda item: timestamp_sort_key(earliest_modified(item[1])))


def sort_by_name(records: Sequence[FileRecord]) -> Tuple[FileRecord, ...]:
    return tuple(sorted(records, key=lambda record: record.name))


def qualifies(records: Sequence[FileRecord], min_group_size: int = DEFAULT_MIN_GROUP_SIZE) -> bool:
    return len(records) >= min_group_size


def partition(
    records: Sequence[FileRecord],
    keep_count: int = DEFAULT_KEEP_COUNT,
    min_group_size: int = DEFAULT_MIN_GROUP_SIZE,
    order: RetentionOrder = RetentionOrder.LISTING,
) -> RetentionSplit:
    """
    Split a group into excess records and the newest records to keep.

    With ``RetentionOrder.LISTING`` the last ``keep_count`` records in listing
    order are kept. With ``RetentionOrder.LAST_MODIFIED`` the group is first
    stable-sorted by last_modified, records without a timestamp counting as oldest.

    Args:
        records: One group, in listing order
        keep_count: Number of records to keep
        min_group_size: Groups smaller than this are not partitioned
        order: Ordering applied before splitting

    Returns:
        RetentionSplit covering the whole group

    Raises:
        ValidationException: If the group is below the minimum size
    """
    if not qualifies(records, min_group_size):
        raise ValidationException(
            f"Group of {len(records)} records is below the minimum size of {min_group_size}",
            error_code="INSUFFICIENT_HISTORY",
        )

    ordered = list(records)
    if order == RetentionOrder.LAST_MODIFIED:
        ordered.sort(key=lambda record: timestamp_sort_key(record.last_modified, missing_last=False))

    return RetentionSplit(excess=tuple(ordered[:-keep_count]), kept=tuple(ordered[-keep_count:]))


def plan_retention(grouping: GroupingResult, config: Optional[RetentionConfig] = None) -> RetentionPlan:
    """Order every group, drop the ones below the size gate and partition the rest."""
    config = config or RetentionConfig(
        keep_count=DEFAULT_KEEP_COUNT,
        min_group_size=DEFAULT_MIN_GROUP_SIZE,
    )
    plan = RetentionPlan()

    for key, records in order_groups(grouping.groups):
        if not qualifies(records, config.min_group_size):
            logger.info(f"--- Not enough files in group '{key}' to save (found {len(records)}) ---")
            plan.skipped_groups.append((key, len(records)))
            continue

        plan.groups.append(
            GroupPlan(
                key=key,
                records=tuple(records),
                display_records=sort_by_name(records),
                earliest=earliest_modified(records),
                split=partition(
                    records,
                    keep_count=config.keep_count,
                    min_group_size=config.min_group_size,
                    order=config.order,
                ),
            )
        )

    return plan
