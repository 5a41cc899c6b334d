"""
Retention pipeline: list and group blobs, write reports, optionally delete the excess.
"""

from typing import Iterable, List, Optional

from loguru import logger

from .config.settings import RetentionConfig, StorageConfig
from .core.grouping import group_records, log_grouping_summary
from .core.models import FileRecord, GroupingResult, RetentionPlan
from .core.retention import plan_retention
from .providers.base import StorageProvider
from .providers.factory import ProviderFactory
from .remover import remove_files
from .reporting.writer import ReportWriter
from .utils.error_handler import ErrorHandler

EXIT_OK = 0
EXIT_FAILURE = 1


class RetentionPipeline:
    """
    Orchestrates one run against a single container.

    Phases run sequentially: listing and grouping (fatal on failure), report
    generation (errors logged, the run continues), and optional deletion of the
    excess records.
    """

    def __init__(
        self,
        storage_config: StorageConfig,
        retention_config: Optional[RetentionConfig] = None,
        provider: Optional[StorageProvider] = None,
    ):
        """
        Args:
            storage_config: Validated storage configuration
            retention_config: Retention policy and output directory (defaults to environment)
            provider: Storage provider; built from storage_config when omitted
        """
        self.storage_config = storage_config.require()
        self.retention_config = retention_config or RetentionConfig()
        self.container_name = self.storage_config.resolved_container_name
        self.provider = provider or ProviderFactory.create_storage_provider(self.storage_config)
        self.writer = ReportWriter(self.retention_config.output_dir)

    async def list_and_group(self) -> Optional[GroupingResult]:
        """List root-level blobs and group them; returns None when the container cannot be read."""
        try:
            logger.info(f"Connecting to storage and listing ROOT-LEVEL files in container: '{self.container_name}'...")
            if not await self.provider.container_exists(self.container_name):
                logger.error(f"Container '{self.container_name}' does not exist or is not accessible.")
                return None

            logger.info(f"Processing files in container '{self.container_name}'...")
            records: List[FileRecord] = [record async for record in self.provider.list_blobs(self.container_name)]
            grouping = group_records(records)
            log_grouping_summary(grouping, self.container_name)
            logger.info("Initial grouping complete. Proceeding to reorder and save...")
            return grouping
        except Exception as e:
            ErrorHandler.log_phase_error(e, "initial grouping")
            logger.error(
                "Please ensure your connection string and container name are correct "
                "and you have network access to the storage account."
            )
            return None

    async def save_reports(self, grouping: GroupingResult) -> Optional[RetentionPlan]:
        """Plan retention and write every report; returns None when the phase aborted."""
        try:
            plan = plan_retention(grouping, self.retention_config)
            await self.writer.write_all(plan)
            return plan
        except Exception as e:
            ErrorHandler.log_phase_error(e, "reordering or saving files")
            return None

    async def delete_excess(self, plan: RetentionPlan):
        names = [record.name for record in plan.excess]
        logger.info(f"Deleting {len(names)} excess files from '{self.container_name}'")
        await remove_files(self.container_name, names, self.provider)

    async def run(self, delete_excess: bool = False) -> int:
        """
        Run every phase and return the process exit code.

        Args:
            delete_excess: Delete the excess records once the reports are written

        Returns:
            EXIT_FAILURE when the container could not be listed, EXIT_OK otherwise
        """
        try:
            grouping = await self.list_and_group()
            if grouping is None:
                logger.error("Aborting file saving due to previous errors.")
                return EXIT_FAILURE

            plan = await self.save_reports(grouping)
            if delete_excess and plan is not None:
                await self.delete_excess(plan)

            logger.info("Application finished!")
            return EXIT_OK
        finally:
            await self.provider.close()

    async def remove(self, names: Iterable[str]) -> int:
        """Delete an explicit list of blobs from the configured container."""
        try:
            await remove_files(self.container_name, names, self.provider)
            return EXIT_OK
        finally:
            await self.provider.close()
