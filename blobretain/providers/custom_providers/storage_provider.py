import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, AsyncIterator, Dict

import aiofiles.os
from loguru import logger

from ...core.models import FileRecord
from ...exceptions import ConfigurationException, ProviderException, ResourceNotFoundException
from ...utils.error_handler import convert_exceptions
from ..base import StorageProvider


class LocalStorageProvider(StorageProvider):
    """Local filesystem-based storage provider. Containers are directories under base_path."""

    def __init__(self, config: Dict[str, Any]):
        """
        Initialize Local Storage Provider.

        Args:
            config: {
                        "base_path": str -> Root directory holding one directory per container
                    }
        """
        self.config = config
        base_path = config.get("base_path")
        if not base_path:
            raise ConfigurationException("Local storage base_path is required")
        self.base_path = Path(base_path).resolve()
        logger.info(f"LocalStorageProvider initialized at {self.base_path}")

    def _container_path(self, container_name: str) -> Path:
        return self.base_path / container_name

    def _blob_path(self, container_name: str, blob_name: str) -> Path:
        container_path = self._container_path(container_name).resolve()
        blob_path = (container_path / blob_name).resolve()
        if container_path not in blob_path.parents:
            raise ProviderException(f"Blob name escapes its container: {blob_name}")
        return blob_path

    async def container_exists(self, container_name: str) -> bool:
        return await aiofiles.os.path.isdir(self._container_path(container_name))

    async def list_blobs(self, container_name: str) -> AsyncIterator[FileRecord]:
        """Yield files under the container directory as posix relative names, sorted by name."""
        container_path = self._container_path(container_name)
        if not container_path.is_dir():
            raise ResourceNotFoundException(f"Container not found: {container_path}")

        names = []
        for root, _dirs, files in os.walk(container_path):
            for file_name in files:
                names.append((Path(root) / file_name).relative_to(container_path).as_posix())

        for name in sorted(names):
            stat = await aiofiles.os.stat(container_path / name)
            yield FileRecord(
                name=name,
                last_modified=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
            )

    @convert_exceptions({OSError: ProviderException})
    async def delete_blob(self, container_name: str, blob_name: str) -> None:
        await aiofiles.os.remove(self._blob_path(container_name, blob_name))

    async def close(self):
        """No-op for local provider (for interface consistency)."""
        logger.debug("LocalStorageProvider closed (no-op).")
