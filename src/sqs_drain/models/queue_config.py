"""
Module: queue_config.py
Description: Immutable configuration for a queue handle.

Key Components:
- QueueConfig: Frozen pydantic model holding the queue name and the
  creation / consumption settings of one logical queue
- FIFO naming: '.fifo' is appended to the name when fifo=True, and the
  resulting name is validated before the model is built

Dependencies: pydantic
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from sqs_drain.config.constants import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_LONG_POLLING_INTERVAL_SECONDS,
    DEFAULT_MESSAGE_GROUP_ID,
    DEFAULT_VISIBILITY_TIMEOUT_SECONDS,
    MAX_BATCH_ENTRIES,
    MAX_LONG_POLLING_INTERVAL_SECONDS,
    MAX_QUEUE_NAME_LENGTH,
    MAX_VISIBILITY_TIMEOUT_SECONDS,
)
from sqs_drain.sqs_queue.validation import derive_fifo_name, validate_queue_name


class QueueConfig(BaseModel):
    """
    Configuration of a single SQS queue handle.

    Attributes:
        queue_name: Final queue name, '.fifo' suffix included for FIFO queues
        fifo: Create a FIFO queue (strict ordering, content-based deduplication)
        visibility_timeout: Seconds a received message stays hidden from other consumers
        long_polling_interval: Seconds each receive call waits for messages (0-20)
        batch_size: Messages requested per receive call; values above 1 make the
            handler receive a list of bodies instead of a single body
        delete_immediately: Delete received messages before the handler runs
        message_group_id: Group id attached to every message sent to a FIFO queue
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid"
    )

    queue_name: str = Field(
        ...,
        min_length=1,
        max_length=MAX_QUEUE_NAME_LENGTH,
        description="SQS queue name"
    )
    fifo: bool = Field(default=False, description="Create a FIFO queue")
    visibility_timeout: int = Field(
        default=DEFAULT_VISIBILITY_TIMEOUT_SECONDS,
        ge=0,
        le=MAX_VISIBILITY_TIMEOUT_SECONDS,
        description="Visibility timeout in seconds"
    )
    long_polling_interval: int = Field(
        default=DEFAULT_LONG_POLLING_INTERVAL_SECONDS,
        ge=0,
        le=MAX_LONG_POLLING_INTERVAL_SECONDS,
        description="Long polling wait time in seconds"
    )
    batch_size: int = Field(
        default=DEFAULT_BATCH_SIZE,
        ge=1,
        le=MAX_BATCH_ENTRIES,
        description="Maximum messages per receive call"
    )
    delete_immediately: bool = Field(
        default=False,
        description="Delete messages before invoking the handler"
    )
    message_group_id: str = Field(
        default=DEFAULT_MESSAGE_GROUP_ID,
        min_length=1,
        max_length=128,
        description="MessageGroupId used for FIFO sends"
    )

    @model_validator(mode="before")
    @classmethod
    def derive_queue_name(cls, data: Any) -> Any:
        """Apply the FIFO suffix and validate the resulting name."""
        if not isinstance(data, dict):
            return data

        # Work on a copy so the caller's mapping is left untouched
        data = dict(data)
        queue_name = data.get("queue_name")
        queue_name = derive_fifo_name(queue_name, bool(data.get("fifo", False)))
        validate_queue_name(queue_name)
        data["queue_name"] = queue_name
        return data

    @property
    def is_batched(self) -> bool:
        """True when the handler receives lists of message bodies."""
        return self.batch_size > 1

    def queue_attributes(self) -> dict:
        """
        Build the CreateQueue attribute map for this configuration.

        Returns:
            Attribute map with string values, as SQS expects
        """
        attributes = {
            'VisibilityTimeout': str(self.visibility_timeout),
            'ReceiveMessageWaitTimeSeconds': str(self.long_polling_interval),
        }
        if self.fifo:
            attributes['FifoQueue'] = 'true'
            attributes['ContentBasedDeduplication'] = 'true'
        return attributes
