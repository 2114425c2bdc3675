"""
Caller-side retry policy for reasoning calls.

Components make a single outbound call; whoever invokes them decides whether
to try again. Only errors flagged ``retryable`` are retried.
"""

from __future__ import annotations

from typing import Awaitable, Callable, TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from workflow_radar.core.exceptions import WorkflowRadarError
from workflow_radar.core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def is_retryable(exc: BaseException) -> bool:
    return isinstance(exc, WorkflowRadarError) and exc.retryable


def _log_retry(retry_state: RetryCallState) -> None:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        "Retrying reasoning call",
        attempt=retry_state.attempt_number,
        error_code=getattr(exc, "code", None),
        error=str(exc),
    )


async def call_with_retry(
    operation: Callable[[], Awaitable[T]],
    max_attempts: int = 1,
    backoff_min: float = 1.0,
    backoff_max: float = 10.0,
) -> T:
    """
    Await ``operation()``, retrying retryable failures with exponential backoff.

    After the last attempt the final error is re-raised unchanged.
    """
    retrying = AsyncRetrying(
        retry=retry_if_exception(is_retryable),
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=1, min=backoff_min, max=backoff_max),
        before_sleep=_log_retry,
        reraise=True,
    )
    return await retrying(operation)
