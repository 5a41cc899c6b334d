from typing import Dict, Type
from loguru import logger

from .base import StorageProvider
from .azure_providers import AzureStorageProvider
from .custom_providers import LocalStorageProvider
from ..config.settings import StorageConfig
from ..exceptions import ConfigurationException


class ProviderFactory:
    """Factory class for creating provider instances."""

    _storage_providers: Dict[str, Type[StorageProvider]] = {
        'azure': AzureStorageProvider,
        'local': LocalStorageProvider,
    }

    @classmethod
    def create_storage_provider(cls, config: StorageConfig = None) -> StorageProvider:
        """
        Create storage provider instance.

        Args:
            config: Storage configuration (optional, defaults to environment)

        Returns:
            StorageProvider instance

        Raises:
            ConfigurationException: If provider is not supported
        """
        config = config or StorageConfig()
        provider_name = config.provider

        if provider_name not in cls._storage_providers:
            raise ConfigurationException(
                f"Unknown storage provider: {provider_name}. "
                f"Supported providers: {list(cls._storage_providers.keys())}"
            )

        provider_class = cls._storage_providers[provider_name]
        logger.info(f"Creating storage provider: {provider_name}")
        return provider_class(config.to_provider_config())

