from typing import Any, AsyncIterator, Dict

from azure.core.exceptions import AzureError
from azure.storage.blob.aio import BlobServiceClient
from loguru import logger

from ...core.models import FileRecord
from ...exceptions import ConfigurationException, ProviderException
from ...utils.error_handler import ErrorHandler, convert_exceptions, vendor_error_code
from ..base import StorageProvider


class AzureStorageProvider(StorageProvider):
    """Azure Blob Storage provider implementation."""

    def __init__(self, config: Dict[str, Any]):
        """
        Initialize Azure Storage Provider.

        Args:
            config: Configuration dictionary with:
                - connection_string: Azure Storage connection string
        """
        self.config = config
        self.service_client = None

    def _initialize(self):
        """Initialize the service client from the connection string."""
        connection_string = self.config.get("connection_string")
        if not connection_string:
            raise ConfigurationException("Azure Storage connection_string is required")
        try:
            self.service_client = BlobServiceClient.from_connection_string(connection_string)
            logger.info("Successfully initialized Azure Blob Storage client")
        except Exception as e:
            logger.exception(f"Failed to initialize Azure Blob Storage client: {e}")
            raise ErrorHandler.handle_provider_error(e, "azure") from e

    def _ensure_initialized(self):
        """Ensure the client is initialized before operations."""
        if self.service_client is None:
            self._initialize()

    @convert_exceptions({AzureError: ProviderException})
    async def container_exists(self, container_name: str) -> bool:
        self._ensure_initialized()
        container_client = self.service_client.get_container_client(container_name)
        return await container_client.exists()

    async def list_blobs(self, container_name: str) -> AsyncIterator[FileRecord]:
        """Yield every blob in the container; SDK errors surface as ProviderException."""
        self._ensure_initialized()
        container_client = self.service_client.get_container_client(container_name)
        try:
            async for blob in container_client.list_blobs():
                yield FileRecord(name=blob.name, last_modified=blob.last_modified)
        except AzureError as e:
            raise ProviderException(
                f"Error listing blobs in container {container_name}: {e}",
                error_code=vendor_error_code(e),
                details={"original_exception": type(e).__name__},
            ) from e

    @convert_exceptions({AzureError: ProviderException})
    async def delete_blob(self, container_name: str, blob_name: str) -> None:
        self._ensure_initialized()
        container_client = self.service_client.get_container_client(container_name)
        blob_client = container_client.get_blob_client(blob_name)
        try:
            await blob_client.delete_blob()
        finally:
            await blob_client.close()

    async def close(self):
        """Close the underlying service client and cleanup."""
        if self.service_client:
            logger.info("Closing Azure Blob Storage client")
            await self.service_client.close()
            self.service_client = None
