from loguru import logger

from blobretain.config.settings import LoggingConfig
from blobretain.utils.logging_config import log_manager


def test_configure_adds_file_sink(tmp_path, clean_env):
    log_file = tmp_path / "blobretain.log"

    log_manager.configure(LoggingConfig(level="INFO", log_file=str(log_file), enable_file_logging=True))
    logger.info("written to file")
    logger.debug("below threshold")
    log_manager.disable_file()
    log_manager.disable_console()

    content = log_file.read_text(encoding="utf-8")
    assert "written to file" in content
    assert "below threshold" not in content


def test_configure_without_file_logging(clean_env):
    log_manager.configure(LoggingConfig(level="WARNING"))

    assert log_manager.console_sink_id is not None
    assert log_manager.file_sink_id is None
    log_manager.disable_console()
