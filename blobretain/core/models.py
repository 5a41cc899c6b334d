"""
Data models for the grouping and retention engine.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class FileRecord:
    """A single blob as reported by a storage listing."""
    name: str
    last_modified: Optional[datetime] = None

    def to_dict(self) -> dict:
        """Export shape used by the JSON report."""
        return {
            "name": self.name,
            "lastModified": self.last_modified.isoformat() if self.last_modified else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "FileRecord":
        last_modified = data.get("lastModified")
        return cls(
            name=data["name"],
            last_modified=datetime.fromisoformat(last_modified) if last_modified else None,
        )


@dataclass
class GroupingResult:
    """Root-level records grouped by key, plus the listing counters."""
    groups: Dict[str, List[FileRecord]]
    skipped_count: int = 0
    total_count: int = 0

    @property
    def grouped_count(self) -> int:
        return sum(len(records) for records in self.groups.values())


@dataclass(frozen=True)
class RetentionSplit:
    """Disjoint partition of one group into records to retire and records to keep."""
    excess: Tuple[FileRecord, ...]
    kept: Tuple[FileRecord, ...]


@dataclass(frozen=True)
class GroupPlan:
    """A group that passed the minimum-size gate, ready for reporting."""
    key: str
    records: Tuple[FileRecord, ...]
    display_records: Tuple[FileRecord, ...]
    earliest: Optional[datetime]
    split: RetentionSplit


@dataclass
class RetentionPlan:
    """Ordered qualifying groups and the groups skipped for insufficient history."""
    groups: List[GroupPlan] = field(default_factory=list)
    skipped_groups: List[Tuple[str, int]] = field(default_factory=list)

    @property
    def all_records(self) -> List[FileRecord]:
        """Every record of every qualifying group, in report order."""
        return [record for group in self.groups for record in group.display_records]

    @property
    def excess(self) -> List[FileRecord]:
        """Excess records of every qualifying group, in group order."""
        return [record for group in self.groups for record in group.split.excess]
