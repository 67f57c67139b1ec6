"""
Package: sqs_drain
Description: Provision, fill and drain Amazon SQS queues.

Wraps queue creation, chunked bulk enqueueing and a long-polling
consumer loop that hands messages to a user handler and stops once
the queue reports no visible messages.
"""

from .models.queue_config import QueueConfig
from .models.stats import QueueStats
from .sqs_queue.engine import QueueEngine
from .sqs_queue.exceptions import (
    QueueError,
    InvalidQueueNameError,
    NotProvisionedError,
    PartialSendFailure,
    PartialDeleteFailure,
    UnexpectedBatchSizeError,
    TransportError,
)

__version__ = "0.1.0"

__all__ = [
    "QueueConfig",
    "QueueStats",
    "QueueEngine",
    "QueueError",
    "InvalidQueueNameError",
    "NotProvisionedError",
    "PartialSendFailure",
    "PartialDeleteFailure",
    "UnexpectedBatchSizeError",
    "TransportError",
]
