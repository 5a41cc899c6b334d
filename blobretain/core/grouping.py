from typing import Dict, Iterable, List
from loguru import logger

from .models import FileRecord, GroupingResult

PATH_SEPARATOR = "/"


def derive_group_key(name: str) -> str:
    """
    Return the group key of a blob name: everything before the first dot.

    Build outputs are named ``<base>.<hash>.<ext>[.<compression>]`` so every
    variant of one asset shares the key. A name without a dot is its own key.
    """
    first_dot = name.find(".")
    if first_dot == -1:
        return name
    return name[:first_dot]


def is_nested(name: str) -> bool:
    return PATH_SEPARATOR in name


def group_records(records: Iterable[FileRecord]) -> GroupingResult:
    """
    Group root-level records by their derived key.

    Args:
        records: Records in listing order

    Returns:
        GroupingResult with a fresh mapping; nested records are only counted
    """
    groups: Dict[str, List[FileRecord]] = {}
    total = 0
    skipped = 0

    for record in records:
        total += 1
        if is_nested(record.name):
            skipped += 1
            continue
        groups.setdefault(derive_group_key(record.name), []).append(record)

    return GroupingResult(groups=groups, skipped_count=skipped, total_count=total)


def log_grouping_summary(result: GroupingResult, container_name: str):
    logger.info(f"--- Initial Grouping Summary in '{container_name}' ---")
    logger.info(f"Total unique groups found: {len(result.groups)}")
    if result.skipped_count > 0:
        logger.info(f"(Skipped {result.skipped_count} nested files out of {result.total_count} total.)")
    else:
        logger.info(f"(No nested files were skipped out of {result.total_count} total.)")
