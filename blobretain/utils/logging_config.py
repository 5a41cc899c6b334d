import sys
from typing import Optional
from loguru import logger

from ..config.settings import LoggingConfig

LOG_FORMAT = "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | {message}"


class LoggerManager:
    def __init__(self):
        self.console_sink_id = None
        self.file_sink_id = None

        # Always remove the default handler
        logger.remove()

    def enable_console(self, level: str = "INFO"):
        # Diagnostics go to stderr so stdout stays clean
        if self.console_sink_id is None:
            self.console_sink_id = logger.add(sys.stderr, level=level.upper(), format=LOG_FORMAT, colorize=True)

    def disable_console(self):
        if self.console_sink_id is not None:
            logger.remove(self.console_sink_id)
            self.console_sink_id = None

    def enable_file(self, path: str, level: str = "INFO", rotation: str = "10 MB", retention_days: int = 7):
        if self.file_sink_id is None:
            self.file_sink_id = logger.add(
                path,
                level=level.upper(),
                rotation=rotation,
                retention=f"{retention_days} days",
                encoding="utf-8",
            )

    def disable_file(self):
        if self.file_sink_id is not None:
            logger.remove(self.file_sink_id)
            self.file_sink_id = None

    def configure(self, logging_config: Optional[LoggingConfig] = None):
        """Reset sinks from a LoggingConfig (console always, file when enabled)."""
        logging_config = logging_config or LoggingConfig()
        self.disable_console()
        self.disable_file()
        self.enable_console(logging_config.level)
        if logging_config.enable_file_logging and logging_config.log_file:
            self.enable_file(
                logging_config.log_file,
                level=logging_config.level,
                rotation=logging_config.max_file_size,
                retention_days=logging_config.retention_days,
            )


log_manager = LoggerManager()
