# app/utils/decorators.py
import inspect
from functools import wraps
from time import time
from app.core.logging import get_logger

logger = get_logger(__name__)


def log_request(func):
    """
    Decorator to log incoming requests and processing time.
    Works with both `def` and `async def` endpoints and keeps sync endpoints
    sync, so FastAPI still runs them in its threadpool.
    """

    def _finished(start_time: float, outcome: str):
        process_time = time() - start_time
        logger.info(
            f"Request to endpoint {func.__name__} {outcome} in {process_time:.4f} seconds"
        )

    if inspect.iscoroutinefunction(func):
        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            start_time = time()
            logger.info(f"Request started for endpoint: {func.__name__}")
            try:
                response = await func(*args, **kwargs)
            except Exception:
                _finished(start_time, "failed")
                raise
            _finished(start_time, "finished")
            return response

        return async_wrapper

    @wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time()
        logger.info(f"Request started for endpoint: {func.__name__}")
        try:
            response = func(*args, **kwargs)
        except Exception:
            _finished(start_time, "failed")
            raise
        _finished(start_time, "finished")
        return response

    return wrapper
