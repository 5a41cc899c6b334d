"""Storage providers for blobretain."""

from .base import StorageProvider
from .factory import ProviderFactory
from .azure_providers import AzureStorageProvider
from .custom_providers import LocalStorageProvider

__all__ = [
    'StorageProvider',
    'ProviderFactory',
    'AzureStorageProvider',
    'LocalStorageProvider',
]
