import csv
import io
import json
import re
from datetime import datetime, timedelta, timezone

from helpers import rec, ts

from blobretain.core.grouping import group_records
from blobretain.core.retention import plan_retention
from blobretain.reporting.formatting import (
    format_timestamp,
    group_report_filename,
    parse_json_export,
    render_csv,
    render_excess_report,
    render_group_report,
    render_json,
    sanitize_group_key,
)


def test_format_timestamp_includes_zone():
    value = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

    assert format_timestamp(value) == "2024-01-02 03:04:05 UTC"


def test_format_timestamp_keeps_offset_zone():
    value = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone(timedelta(hours=2)))

    assert format_timestamp(value) == "2024-01-02 03:04:05 UTC+02:00"


def test_format_timestamp_treats_naive_as_utc():
    assert format_timestamp(datetime(2024, 6, 1, 12, 0, 0)) == "2024-06-01 12:00:00 UTC"


def test_format_timestamp_absent_is_na():
    assert format_timestamp(None) == "N/A"


def test_sanitize_group_key_replaces_unsafe_characters():
    sanitized = sanitize_group_key("my key/2")

    assert sanitized == "my_key_2"
    assert re.fullmatch(r"[A-Za-z0-9\-._]+", sanitized)


def test_sanitize_group_key_blocks_path_traversal():
    file_name = group_report_filename("../../etc/passwd")

    assert "/" not in file_name
    assert "\\" not in group_report_filename("..\\windows")
    assert file_name == ".._.._etc_passwd.txt"


def test_sanitize_group_key_keeps_safe_characters():
    assert sanitize_group_key("photo-2.v1") == "photo-2.v1"


def test_render_group_report_lists_records_by_name():
    plan = plan_retention(group_records([
        rec("site.b.js", 20), rec("site.a.js", 10), rec("site.c.js"),
    ]))

    report = render_group_report(plan.groups[0])

    assert report == (
        "Group Name: site\n"
        f"Earliest Modified: {format_timestamp(ts(10))}\n"
        "\n"
        f"- site.a.js (Last Modified: {format_timestamp(ts(10))})\n"
        f"- site.b.js (Last Modified: {format_timestamp(ts(20))})\n"
        "- site.c.js (Last Modified: N/A)\n"
        "\n"
        "--- End of Group site ---\n"
        "\n"
    )


def test_render_group_report_undated_group():
    plan = plan_retention(group_records([rec("x.1"), rec("x.2"), rec("x.3")]))

    report = render_group_report(plan.groups[0])

    assert "Earliest Modified: N/A\n" in report


def test_render_excess_report_sorts_by_last_modified():
    records = [rec("c.1", 30), rec("u.1"), rec("a.1", 10), rec("u.2"), rec("b.1", 20)]

    report = render_excess_report(records)

    lines = report.splitlines()
    assert lines[0] == "Earliest Totals:"
    assert lines[1] == ""
    names = [line.split(" ")[1] for line in lines[2:]]
    assert names == ["a.1", "b.1", "c.1", "u.1", "u.2"]


def test_render_csv_header_and_rows():
    content = render_csv([rec("a.1", 10), rec("a.2")])

    rows = list(csv.reader(io.StringIO(content)))
    assert rows[0] == ["Name", "Last Modified"]
    assert rows[1] == ["a.1", ts(10).isoformat()]
    assert rows[2] == ["a.2", ""]


def test_render_json_is_pretty_printed_array():
    content = render_json([rec("a.1", 10), rec("a.2")])

    assert content.startswith("[\n  {")
    assert json.loads(content) == [
        {"name": "a.1", "lastModified": ts(10).isoformat()},
        {"name": "a.2", "lastModified": None},
    ]


def test_json_export_round_trip():
    records = [rec("a.1", 10), rec("a.2"), rec("b.1", 99)]

    restored = parse_json_export(render_json(records))

    assert {(r.name, r.last_modified) for r in restored} == {(r.name, r.last_modified) for r in records}
