from enum import Enum
from typing import Dict, Optional, Tuple, Type
import os

from dotenv import load_dotenv, find_dotenv
from loguru import logger
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from ..exceptions import ConfigurationException

# Reserved Azure container names that cannot be typed without the "$" prefix
RESERVED_CONTAINER_ALIASES: Dict[str, str] = {
    "web": "$web",
    "log": "$log",
}

SUPPORTED_STORAGE_PROVIDERS = ("azure", "local")


def resolve_container_name(name: str) -> str:
    """Map a logical container name onto the platform name (web -> $web, log -> $log)."""
    return RESERVED_CONTAINER_ALIASES.get(name, name)


class RetentionOrder(str, Enum):
    """How records inside a group are ordered before the newest ones are kept."""
    LISTING = "listing"
    LAST_MODIFIED = "last_modified"


class ExplicitEnvSettings(BaseSettings):
    """
    Settings populated only from constructor values.

    Subclasses read their documented environment variables in __init__, so
    generic names such as CONTAINER_NAME or LEVEL are never picked up.
    """

    model_config = SettingsConfigDict(
        validate_assignment=True,
        extra="ignore",
        case_sensitive=False
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings,)


class StorageConfig(ExplicitEnvSettings):
    """Storage configuration."""

    provider: str = Field(default="azure")
    connection_string: Optional[str] = Field(default=None)
    container_name: Optional[str] = Field(default=None)
    local_root: Optional[str] = Field(default=None)

    def __init__(self, **kwargs):
        # Force load environment variables before validation
        load_dotenv(find_dotenv())

        # If no explicit values provided, use environment variables
        if not kwargs:
            kwargs = {
                'provider': os.getenv("STORAGE_PROVIDER", "azure"),
                'connection_string': os.getenv("AZURE_STORAGE_CONNECTION_STRING"),
                'container_name': os.getenv("AZURE_STORAGE_CONTAINER_NAME"),
                'local_root': os.getenv("STORAGE_LOCAL_ROOT"),
            }
            # Remove None values
            kwargs = {k: v for k, v in kwargs.items() if v is not None}

        super().__init__(**kwargs)

    @property
    def resolved_container_name(self) -> Optional[str]:
        if not self.container_name:
            return self.container_name
        return resolve_container_name(self.container_name)

    def require(self) -> "StorageConfig":
        """
        Fail fast when a value needed to reach storage is missing.

        Returns:
            self, so the call can be chained

        Raises:
            ConfigurationException: If the provider is unknown or a required value is unset
        """
        if self.provider not in SUPPORTED_STORAGE_PROVIDERS:
            raise ConfigurationException(
                f"Unknown storage provider: {self.provider}. "
                f"Supported providers: {list(SUPPORTED_STORAGE_PROVIDERS)}",
                error_code="UNKNOWN_PROVIDER",
            )
        if self.provider == "azure" and not self.connection_string:
            raise ConfigurationException(
                "AZURE_STORAGE_CONNECTION_STRING is not set",
                error_code="MISSING_CONNECTION_STRING",
            )
        if self.provider == "local" and not self.local_root:
            raise ConfigurationException(
                "STORAGE_LOCAL_ROOT is not set",
                error_code="MISSING_LOCAL_ROOT",
            )
        if not self.container_name:
            raise ConfigurationException(
                "AZURE_STORAGE_CONTAINER_NAME is not set",
                error_code="MISSING_CONTAINER_NAME",
            )
        return self

    def to_provider_config(self) -> dict:
        """Convert to provider configuration dictionary."""
        return {
            "connection_string": self.connection_string,
            "base_path": self.local_root,
        }


class RetentionConfig(ExplicitEnvSettings):
    """Grouping and retention policy configuration."""

    keep_count: int = Field(default=2, ge=1)
    min_group_size: int = Field(default=3, ge=1)
    order: RetentionOrder = Field(default=RetentionOrder.LISTING)
    output_dir: str = Field(default="./output")

    def __init__(self, **kwargs):
        load_dotenv(find_dotenv())

        if not kwargs:
            kwargs = {
                'keep_count': os.getenv("RETENTION_KEEP_COUNT"),
                'min_group_size': os.getenv("RETENTION_MIN_GROUP_SIZE"),
                'order': os.getenv("RETENTION_ORDER"),
                'output_dir': os.getenv("OUTPUT_DIR"),
            }
            kwargs = {k: v for k, v in kwargs.items() if v is not None}

        super().__init__(**kwargs)

    @model_validator(mode="after")
    def _check_gate(self):
        if self.min_group_size <= self.keep_count:
            raise ValueError(
                f"min_group_size ({self.min_group_size}) must be greater than keep_count ({self.keep_count})"
            )
        return self


class LoggingConfig(ExplicitEnvSettings):
    """Logging configuration."""

    level: str = Field(default="INFO")
    log_file: Optional[str] = Field(default=None)
    enable_file_logging: bool = Field(default=False)
    max_file_size: str = Field(default="10 MB")
    retention_days: int = Field(default=7)

    def __init__(self, **kwargs):
        load_dotenv(find_dotenv())

        if not kwargs:
            kwargs = {
                'level': os.getenv("LOG_LEVEL"),
                'log_file': os.getenv("LOG_FILE"),
                'enable_file_logging': os.getenv("LOG_ENABLE_FILE"),
                'max_file_size': os.getenv("LOG_MAX_FILE_SIZE"),
                'retention_days': os.getenv("LOG_RETENTION_DAYS"),
            }
            kwargs = {k: v for k, v in kwargs.items() if v is not None}

        super().__init__(**kwargs)

    @field_validator("level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        level = value.upper()
        try:
            logger.level(level)
        except ValueError:
            raise ValueError(f"Unknown log level: {value}")
        return level
