import inspect
import functools
from typing import TypeVar, Callable, Optional
from loguru import logger
from ..exceptions import BlobRetainException, ProviderException

T = TypeVar('T')


def vendor_error_code(e: Exception) -> Optional[str]:
    """Return the vendor-specific error code carried by an exception, if any."""
    for attr in ("error_code", "code"):
        code = getattr(e, attr, None)
        if code:
            return str(code)
    return None


def convert_exceptions(exception_map: dict):
    """
    Decorator to convert exceptions to blobretain exceptions.

    The vendor error code of the original exception is kept on the converted one.

    Args:
        exception_map: Dictionary mapping exception types to blobretain exception types
    """
    def _convert(e: Exception):
        if isinstance(e, BlobRetainException):
            return None
        for source_exc, target_exc in exception_map.items():
            if isinstance(e, source_exc):
                return target_exc(
                    str(e),
                    error_code=vendor_error_code(e),
                    details={"original_exception": type(e).__name__},
                )
        return None

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs) -> T:
            try:
                return await func(*args, **kwargs)
            except Exception as e:
                converted = _convert(e)
                if converted is not None:
                    raise converted from e
                raise

        @functools.wraps(func)
        def sync_wrapper(*args, **kwargs) -> T:
            try:
                return func(*args, **kwargs)
            except Exception as e:
                converted = _convert(e)
                if converted is not None:
                    raise converted from e
                raise

        # Return appropriate wrapper based on function type
        if inspect.iscoroutinefunction(func):
            return async_wrapper
        else:
            return sync_wrapper

    return decorator


class ErrorHandler:
    """Centralized error handling utilities."""

    @staticmethod
    def handle_provider_error(e: Exception, provider_name: str) -> ProviderException:
        """Convert provider-specific exceptions to ProviderException."""
        error_details = {
            "provider": provider_name,
            "original_exception": type(e).__name__,
            "message": str(e)
        }

        logger.error(f"Provider {provider_name} error: {e}")
        return ProviderException(
            f"Provider {provider_name} failed: {e}",
            error_code=vendor_error_code(e) or "PROVIDER_ERROR",
            details=error_details
        )

    @staticmethod
    def log_phase_error(e: Exception, phase: str):
        """Log an error that aborted a pipeline phase, with its vendor code when present."""
        logger.error(f"An unexpected error occurred during {phase}:")
        logger.error(f"Error message: {e}")
        code = vendor_error_code(e)
        if code:
            logger.error(f"Error code: {code}")
        logger.opt(exception=e).debug(f"Traceback for {phase} failure")
