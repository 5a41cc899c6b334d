from typing import Dict


class BlobRetainException(Exception):
    """Base exception for blobretain."""

    def __init__(self, message: str, error_code: str = None, details: Dict = None):
        super().__init__(message)
        self.error_code = error_code
        self.details = details or {}


class ProviderException(BlobRetainException):
    """Raised when a storage provider call fails."""
    pass


class ConfigurationException(BlobRetainException):
    """Raised when configuration is invalid or incomplete."""
    pass


class ValidationException(BlobRetainException):
    """Raised when input validation fails."""
    pass


class ResourceNotFoundException(BlobRetainException):
    """Raised when a container or blob does not exist."""
    pass
