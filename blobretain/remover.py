from typing import Iterable

from loguru import logger

from .providers.base import StorageProvider


async def remove_files(container_name: str, names: Iterable[str], provider: StorageProvider) -> None:
    """
    Delete each named blob from the container, best effort.

    Every name is attempted in order; a failed deletion is logged and the loop
    moves on. Nothing is retried or rolled back.

    Args:
        container_name: Container holding the blobs
        names: Blob names to delete
        provider: Any storage provider exposing delete_blob
    """
    for name in names:
        try:
            await provider.delete_blob(container_name, name)
            logger.info(f"Deleted file: {name}")
        except Exception as e:
            logger.error(f"Error deleting file {name}: {e}")
