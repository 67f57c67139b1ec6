"""
Module: validation.py
Description: SQS queue name validation.

Standard queue names are 1-80 characters of letters, digits, hyphens
and underscores. FIFO queue names carry a mandatory '.fifo' suffix,
and the 80 character limit applies to the full name including it.
"""

import re

from sqs_drain.config.constants import FIFO_SUFFIX, MAX_QUEUE_NAME_LENGTH
from .exceptions import InvalidQueueNameError

STANDARD_QUEUE_NAME_PATTERN = re.compile(r'[a-zA-Z0-9_-]{1,80}')


def is_fifo_queue_name(queue_name: str) -> bool:
    """Return True if the name ends with the '.fifo' suffix."""
    return queue_name[-len(FIFO_SUFFIX):] == FIFO_SUFFIX


def validate_queue_name(queue_name: str) -> None:
    """
    Ensure a queue name is 1-80 characters long with no illegal characters.

    Args:
        queue_name: Full queue name, including any '.fifo' suffix

    Raises:
        InvalidQueueNameError: If the name is empty, too long or malformed
    """
    if not queue_name or not isinstance(queue_name, str):
        raise InvalidQueueNameError(queue_name, "You must provide a queue name")

    if len(queue_name) > MAX_QUEUE_NAME_LENGTH:
        raise InvalidQueueNameError(
            queue_name,
            f"Queue names cannot be longer than {MAX_QUEUE_NAME_LENGTH} characters"
        )

    base_name = queue_name
    if is_fifo_queue_name(queue_name):
        base_name = queue_name[:-len(FIFO_SUFFIX)]

    if not STANDARD_QUEUE_NAME_PATTERN.fullmatch(base_name):
        raise InvalidQueueNameError(
            queue_name,
            f"Queue name '{queue_name}' contains invalid characters"
        )


def derive_fifo_name(queue_name: str, fifo: bool) -> str:
    """
    Append the '.fifo' suffix when a FIFO queue is requested and it is missing.

    Example:
        >>> derive_fifo_name("orders", fifo=True)
        'orders.fifo'
        >>> derive_fifo_name("orders", fifo=False)
        'orders'
    """
    if fifo and queue_name and isinstance(queue_name, str) and not is_fifo_queue_name(queue_name):
        return queue_name + FIFO_SUFFIX
    return queue_name
