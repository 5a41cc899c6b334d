from .settings import (
    LoggingConfig,
    RetentionConfig,
    RetentionOrder,
    StorageConfig,
    RESERVED_CONTAINER_ALIASES,
    resolve_container_name,
)

__all__ = [
    "LoggingConfig",
    "RetentionConfig",
    "RetentionOrder",
    "StorageConfig",
    "RESERVED_CONTAINER_ALIASES",
    "resolve_container_name",
]
