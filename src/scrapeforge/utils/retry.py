"""Retry configuration shared by the AI suggestion calls, built on tenacity."""

from collections.abc import Callable
from typing import Any

import logfire
from tenacity import (
    BaseRetrying,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)


def get_retryer(
    max_attempts: int = 3,
    wait_min: float = 1.0,
    wait_max: float = 10.0,
    exceptions: tuple[type[BaseException], ...] = (Exception,),
    log_callback: Callable[[Any], None] | None = None,
) -> BaseRetrying:
    """Create a tenacity Retrying object with exponential backoff.

    Args:
        max_attempts: Maximum number of attempts, the first one included.
        wait_min: First wait between attempts in seconds, doubled after each attempt.
        wait_max: Maximum wait time between attempts in seconds.
        exceptions: Exception types that trigger another attempt.
        log_callback: Optional before_sleep callback receiving the retry state.

    Returns:
        A configured tenacity.Retrying object that reraises the last error.

    """
    return Retrying(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=wait_min, min=wait_min, max=wait_max),
        retry=retry_if_exception_type(exceptions),
        before_sleep=log_callback,
        reraise=True,
    )


def log_retry(retry_state: Any) -> None:
    """Default before_sleep callback: report the failed attempt to logfire.

    Args:
        retry_state: The tenacity retry state object.

    """
    exception = retry_state.outcome.exception() if retry_state.outcome else None
    logfire.warn(
        'Retrying AI request',
        attempt=retry_state.attempt_number,
        error=str(exception) if exception else 'Unknown error',
    )
