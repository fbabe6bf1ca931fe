import logging
import time
from typing import Callable, Optional, TypeVar

from google.genai import errors as genai_errors

logger = logging.getLogger(__name__)

T = TypeVar("T")

RATE_LIMIT_STATUS = 429
DEFAULT_RETRIES = 3
DEFAULT_DELAY_SECONDS = 1.0


def is_rate_limit_error(exc: BaseException) -> bool:
    if isinstance(exc, genai_errors.APIError):
        return exc.code == RATE_LIMIT_STATUS
    for attr in ("status_code", "status", "code"):
        if getattr(exc, attr, None) == RATE_LIMIT_STATUS:
            return True
    return False


def retry_with_backoff(
        operation: Callable[[], T],
        retries: int = DEFAULT_RETRIES,
        delay: float = DEFAULT_DELAY_SECONDS,
        sleep: Optional[Callable[[float], None]] = None,
) -> T:
    """
    Calls `operation` and retries it only when it fails with a rate-limit error.

    The wait starts at `delay` seconds and doubles after every retry. Any other
    error, or a rate-limit error once `retries` is used up, is re-raised as is.
    """
    sleep = sleep or time.sleep
    attempt = 0
    while True:
        try:
            return operation()
        except Exception as e:
            if attempt >= retries or not is_rate_limit_error(e):
                raise
            attempt += 1
            logger.warning(f"Rate limited. Retrying in {delay:.2f}s (retry {attempt}/{retries})...")
            sleep(delay)
            delay *= 2

