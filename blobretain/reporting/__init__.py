"""Report rendering and writing."""

from .formatting import (
    NOT_AVAILABLE,
    format_timestamp,
    group_report_filename,
    parse_json_export,
    render_csv,
    render_excess_report,
    render_group_report,
    render_json,
    sanitize_group_key,
    sort_by_last_modified,
)
from .writer import ALLDATA_CSV, ALLDATA_JSON, EXCESS_REPORT, ReportWriter

__all__ = [
    "NOT_AVAILABLE",
    "format_timestamp",
    "group_report_filename",
    "parse_json_export",
    "render_csv",
    "render_excess_report",
    "render_group_report",
    "render_json",
    "sanitize_group_key",
    "sort_by_last_modified",
    "ALLDATA_CSV",
    "ALLDATA_JSON",
    "EXCESS_REPORT",
    "ReportWriter",
]
