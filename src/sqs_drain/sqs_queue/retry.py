"""
Module: retry.py
Description: Optional retry policy for message handlers.

By default a handler failure ends the consumer loop. An engine built
with a retry policy re-invokes the handler with exponential backoff
before giving up and re-raising the last failure.
"""

from typing import Tuple, Type

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from sqs_drain.utils.logger import get_logger

logger = get_logger(__name__)


def _log_retry(retry_state: RetryCallState) -> None:
    outcome = retry_state.outcome
    logger.warning(
        "Handler failed, retrying",
        attempt=retry_state.attempt_number,
        error=str(outcome.exception()) if outcome else None,
        next_sleep_seconds=retry_state.next_action.sleep if retry_state.next_action else None
    )


def handler_retry_policy(
    attempts: int = 3,
    min_wait: float = 1,
    max_wait: float = 30,
    retry_on: Tuple[Type[BaseException], ...] = (Exception,)
) -> AsyncRetrying:
    """
    Build a tenacity policy for retrying handler calls.

    Args:
        attempts: Total handler invocations before giving up
        min_wait: Minimum backoff in seconds
        max_wait: Maximum backoff in seconds
        retry_on: Exception types that trigger a retry

    Returns:
        AsyncRetrying instance to pass as QueueEngine(retry_policy=...)

    Raises:
        ValueError: If attempts is not positive
    """
    if attempts < 1:
        raise ValueError("attempts must be positive")

    return AsyncRetrying(
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=1, min=min_wait, max=max_wait),
        retry=retry_if_exception_type(retry_on),
        before_sleep=_log_retry,
        reraise=True
    )
