from .error_handler import ErrorHandler, convert_exceptions, vendor_error_code
from .logging_config import LoggerManager, log_manager

__all__ = [
    "ErrorHandler",
    "convert_exceptions",
    "vendor_error_code",
    "LoggerManager",
    "log_manager",
]
