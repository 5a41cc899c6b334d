from abc import ABC, abstractmethod
from typing import AsyncIterator

from ...core.models import FileRecord


class StorageProvider(ABC):
    """Abstract base class for storage providers."""

    @abstractmethod
    async def container_exists(self, container_name: str) -> bool:
        """Return whether the container exists and is reachable."""
        pass

    @abstractmethod
    def list_blobs(self, container_name: str) -> AsyncIterator[FileRecord]:
        """Yield every blob in the container as a FileRecord, in provider order."""
        pass

    @abstractmethod
    async def delete_blob(self, container_name: str, blob_name: str) -> None:
        """Delete one blob; raises ProviderException on failure."""
        pass

    @abstractmethod
    async def close(self):
        """Close the underlying client and cleanup."""
        pass
