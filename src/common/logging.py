import asyncio
import logging
import time
from functools import wraps
from typing import Callable

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """
    Sets up a logger with a standard format.
    Used by entry points (CLI, server); library modules just call
    logging.getLogger(__name__).
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(level)
    return logger


def log_execution_time(logger: logging.Logger, threshold: float = 0.01):
    """
    Decorator to measure and log execution time of a function.
    Works for both plain functions and coroutines.
    """
    def _report(name: str, start: float):
        elapsed = time.perf_counter() - start
        # Only noisy when slow or when debug is on
        if logger.isEnabledFor(logging.DEBUG) or elapsed > threshold:
            logger.debug(f"{name} executed in {elapsed:.3f}s")

    def decorator(func: Callable):
        if asyncio.iscoroutinefunction(func):
            @wraps(func)
            async def async_wrapper(*args, **kwargs):
                start = time.perf_counter()
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    logger.error(f"{func.__name__} failed: {e}", exc_info=True)
                    raise
                _report(func.__name__, start)
                return result
            return async_wrapper

        @wraps(func)
        def wrapper(*args, **kwargs):
            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.error(f"{func.__name__} failed: {e}", exc_info=True)
                raise
            _report(func.__name__, start)
            return result
        return wrapper
    return decorator
