import pytest
from pydantic import ValidationError

from blobretain.config.settings import (
    LoggingConfig,
    RetentionConfig,
    RetentionOrder,
    StorageConfig,
    resolve_container_name,
)
from blobretain.exceptions import ConfigurationException


@pytest.mark.parametrize("name, expected", [
    ("web", "$web"),
    ("log", "$log"),
    ("assets", "assets"),
    ("$web", "$web"),
])
def test_resolve_container_name(name, expected):
    assert resolve_container_name(name) == expected


def test_storage_config_from_environment(clean_env):
    clean_env.setenv("AZURE_STORAGE_CONNECTION_STRING", "UseDevelopmentStorage=true")
    clean_env.setenv("AZURE_STORAGE_CONTAINER_NAME", "web")

    config = StorageConfig().require()

    assert config.provider == "azure"
    assert config.connection_string == "UseDevelopmentStorage=true"
    assert config.resolved_container_name == "$web"


def test_storage_config_requires_connection_string(clean_env):
    config = StorageConfig(container_name="assets")

    with pytest.raises(ConfigurationException) as exc_info:
        config.require()

    assert exc_info.value.error_code == "MISSING_CONNECTION_STRING"


def test_storage_config_requires_container_name(clean_env):
    config = StorageConfig(connection_string="UseDevelopmentStorage=true")

    with pytest.raises(ConfigurationException) as exc_info:
        config.require()

    assert exc_info.value.error_code == "MISSING_CONTAINER_NAME"


def test_local_provider_requires_root(clean_env):
    config = StorageConfig(provider="local", container_name="assets")

    with pytest.raises(ConfigurationException):
        config.require()


def test_unknown_provider_is_rejected(clean_env):
    with pytest.raises(ConfigurationException):
        StorageConfig(provider="ftp", container_name="assets").require()


def test_retention_config_defaults(clean_env):
    config = RetentionConfig()

    assert config.keep_count == 2
    assert config.min_group_size == 3
    assert config.order == RetentionOrder.LISTING
    assert config.output_dir == "./output"


def test_retention_config_from_environment(clean_env):
    clean_env.setenv("RETENTION_ORDER", "last_modified")
    clean_env.setenv("OUTPUT_DIR", "/tmp/reports")

    config = RetentionConfig()

    assert config.order == RetentionOrder.LAST_MODIFIED
    assert config.output_dir == "/tmp/reports"


def test_retention_config_gate_must_exceed_keep_count(clean_env):
    with pytest.raises(ValidationError):
        RetentionConfig(keep_count=3, min_group_size=3)


def test_logging_config_from_environment(clean_env):
    clean_env.setenv("LOG_LEVEL", "DEBUG")
    clean_env.setenv("LOG_ENABLE_FILE", "true")

    config = LoggingConfig()

    assert config.level == "DEBUG"
    assert config.enable_file_logging is True


def test_logging_level_is_normalized(clean_env):
    assert LoggingConfig(level="debug").level == "DEBUG"


@pytest.mark.parametrize("level", ["loud", ""])
def test_unknown_logging_level_is_rejected(clean_env, level):
    with pytest.raises(ValidationError):
        LoggingConfig(level=level)


def test_unprefixed_variables_are_ignored(clean_env):
    # Generic names commonly exported by other tools must not leak into the settings
    clean_env.setenv("CONTAINER_NAME", "elsewhere")
    clean_env.setenv("CONNECTION_STRING", "UseDevelopmentStorage=true")
    clean_env.setenv("PROVIDER", "local")
    clean_env.setenv("ORDER", "last_modified")
    clean_env.setenv("LEVEL", "DEBUG")
    clean_env.setenv("KEEP_COUNT", "5")

    storage = StorageConfig()
    retention = RetentionConfig()

    assert storage.provider == "azure"
    assert storage.container_name is None
    assert storage.connection_string is None
    with pytest.raises(ConfigurationException):
        storage.require()
    assert retention.order == RetentionOrder.LISTING
    assert retention.keep_count == 2
    assert LoggingConfig().level == "INFO"
