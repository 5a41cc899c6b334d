"""
Pure renderers for the text, CSV and JSON report artifacts.
"""

import csv
import io
import json
import re
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from ..core.models import FileRecord, GroupPlan
from ..core.retention import timestamp_sort_key

NOT_AVAILABLE = "N/A"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
CSV_HEADER = ("Name", "Last Modified")

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9\-.]")


def format_timestamp(value: Optional[datetime]) -> str:
    """Render a timestamp with its zone designator, or N/A when absent."""
    if value is None:
        return NOT_AVAILABLE
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    zone = value.tzname() or value.strftime("%z")
    return f"{value.strftime(TIMESTAMP_FORMAT)} {zone}"


def sanitize_group_key(key: str) -> str:
    """Replace every character outside [A-Za-z0-9-.] with an underscore."""
    return _UNSAFE_FILENAME_CHARS.sub("_", key)


def group_report_filename(key: str) -> str:
    return f"{sanitize_group_key(key)}.txt"


def _record_line(record: FileRecord) -> str:
    return f"- {record.name} (Last Modified: {format_timestamp(record.last_modified)})\n"


def render_group_report(group: GroupPlan) -> str:
    content = f"Group Name: {group.key}\n"
    content += f"Earliest Modified: {format_timestamp(group.earliest)}\n\n"
    for record in group.display_records:
        content += _record_line(record)
    content += f"\n--- End of Group {group.key} ---\n\n"
    return content


def sort_by_last_modified(records: Sequence[FileRecord]) -> List[FileRecord]:
    """Stable ascending sort; records without a timestamp keep input order after the dated ones."""
    return sorted(records, key=lambda record: timestamp_sort_key(record.last_modified))


def render_excess_report(records: Sequence[FileRecord]) -> str:
    content = "Earliest Totals:\n\n"
    for record in sort_by_last_modified(records):
        content += _record_line(record)
    return content


def render_csv(records: Sequence[FileRecord]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for record in records:
        writer.writerow([
            record.name,
            record.last_modified.isoformat() if record.last_modified else "",
        ])
    return buffer.getvalue()


def render_json(records: Sequence[FileRecord]) -> str:
    return json.dumps([record.to_dict() for record in records], indent=2)


def parse_json_export(content: str) -> List[FileRecord]:
    """Read records back from an alldata.json export."""
    return [FileRecord.from_dict(item) for item in json.loads(content)]
