"""
Module: stats.py
Description: Queue attribute snapshot returned by QueueEngine.get_stats().
"""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class QueueStats(BaseModel):
    """
    Approximate visible message count and ARN of a queue.

    Values are fetched fresh from SQS on every call and never cached.
    """

    model_config = ConfigDict(frozen=True)

    message_count: int = Field(..., ge=0, description="ApproximateNumberOfMessages")
    queue_arn: str = Field(..., description="Queue ARN")

    @classmethod
    def from_attributes(cls, attributes: Dict[str, Any]) -> "QueueStats":
        """Build stats from a GetQueueAttributes 'Attributes' map."""
        return cls(
            message_count=int(attributes.get('ApproximateNumberOfMessages', 0)),
            queue_arn=attributes.get('QueueArn', ''),
        )
