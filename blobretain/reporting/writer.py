import os
from pathlib import Path
from typing import Sequence

import aiofiles
from loguru import logger

from ..core.models import FileRecord, RetentionPlan
from .formatting import (
    group_report_filename,
    render_csv,
    render_excess_report,
    render_group_report,
    render_json,
)

ALLDATA_CSV = "alldata.csv"
ALLDATA_JSON = "alldata.json"
EXCESS_REPORT = "earliest_totals.txt"


class ReportWriter:
    """Writes the per-group, aggregate and excess report artifacts to one directory."""

    def __init__(self, output_dir: str = "./output"):
        self.output_dir = Path(output_dir)

    def ensure_output_dir(self):
        if self.output_dir.is_dir():
            logger.info(f"Output directory already exists: {self.output_dir}")
        else:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            logger.info(f"Created output directory: {self.output_dir}")

    async def _write_text(self, file_name: str, content: str) -> bool:
        """Write one artifact; failures are logged and reported as False."""
        path = self.output_dir / file_name
        try:
            # Undecodable names survive listing as surrogate escapes; lone surrogates cannot be written
            data = content.encode("utf-8", errors="surrogateescape")
            async with aiofiles.open(path, "wb") as f:
                await f.write(data)
            logger.info(f"Saved: {path}")
            return True
        except (OSError, UnicodeError) as e:
            logger.error(f"Failed to write {path}: {e}")
            return False

    async def write_group_reports(self, plan: RetentionPlan) -> int:
        """
        Write one report per qualifying group.

        Keys that sanitize to the same file name overwrite each other; the
        collision is logged and the file is counted once.

        Returns:
            Number of group report files written successfully
        """
        logger.info(f"--- Found {len(plan.groups)} groups to save ---")
        logger.info("--- Saving Grouped Files (Sorted by Earliest Modification Date) ---")

        owners = {}
        saved = set()
        for group in plan.groups:
            file_name = group_report_filename(group.key)
            if file_name in owners:
                logger.warning(
                    f"Group '{group.key}' collides with group '{owners[file_name]}' "
                    f"on {file_name}; the earlier report will be overwritten"
                )
            owners[file_name] = group.key
            if await self._write_text(file_name, render_group_report(group)):
                saved.add(file_name)
        return len(saved)

    async def write_exports(self, records: Sequence[FileRecord]):
        if not records:
            logger.info("No records to export")
            return
        await self._write_text(ALLDATA_CSV, render_csv(records))
        await self._write_text(ALLDATA_JSON, render_json(records))

    async def write_excess_report(self, records: Sequence[FileRecord]):
        if not records:
            logger.info("No excess files to report")
            return
        await self._write_text(EXCESS_REPORT, render_excess_report(records))

    async def write_all(self, plan: RetentionPlan) -> int:
        """Write every artifact for a plan and return the number of group reports saved."""
        self.ensure_output_dir()
        saved = await self.write_group_reports(plan)
        await self.write_exports(plan.all_records)
        logger.info(f"Successfully saved {saved} group files to '{os.fspath(self.output_dir)}'")
        await self.write_excess_report(plan.excess)
        return saved
