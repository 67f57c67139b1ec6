"""
Module: exceptions.py
Description: Error types raised by queue operations.

Every error carries a human-readable message, a machine-readable
error code and a details dictionary describing what failed.
"""

from typing import Any, Dict, List, Optional


class QueueError(Exception):
    """
    Base exception for all queue errors.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code
        details: Additional context (queue name, failed entries, etc.)
    """

    error_code: str = "QueueError"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.error_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to a dictionary suitable for structured logs."""
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details
            }
        }


class InvalidQueueNameError(QueueError):
    """Raised when a queue name is empty, too long or has illegal characters."""

    error_code = "InvalidQueueName"

    def __init__(self, queue_name: str, reason: str):
        super().__init__(reason, details={"queue_name": queue_name})
        self.queue_name = queue_name


class NotProvisionedError(QueueError):
    """Raised when an operation needs a queue URL but create() has not succeeded."""

    error_code = "NotProvisioned"

    def __init__(self, queue_name: str, operation: str):
        message = (
            f"The queue '{queue_name}' hasn't been created yet. "
            f"Call 'create()' before calling '{operation}()'."
        )
        super().__init__(message, details={"queue_name": queue_name, "operation": operation})


class _PartialBatchFailure(QueueError):
    """Shared shape for batch calls that report per-entry failures."""

    action = "process"

    def __init__(self, queue_url: str, failed: List[Dict[str, Any]]):
        lines = "\n".join(
            f"  [{entry.get('id')}] {entry.get('code')}: {entry.get('reason')} "
            f"(body={entry.get('body')!r})"
            for entry in failed
        )
        message = f"Failed to {self.action} the following messages:\n{lines}"
        super().__init__(message, details={"queue_url": queue_url, "failed": failed})
        self.failed = failed


class PartialSendFailure(_PartialBatchFailure):
    """Raised when SendMessageBatch rejects one or more entries."""

    error_code = "PartialSendFailure"
    action = "enqueue"


class PartialDeleteFailure(_PartialBatchFailure):
    """Raised when DeleteMessageBatch rejects one or more entries."""

    error_code = "PartialDeleteFailure"
    action = "delete"


class UnexpectedBatchSizeError(QueueError):
    """Raised when ReceiveMessage returns more messages than the configured batch size allows."""

    error_code = "UnexpectedBatchSize"

    def __init__(self, batch_size: int, received: int):
        message = (
            f"The configured batch_size is {batch_size} but 'receive_message' "
            f"returned {received} messages"
        )
        super().__init__(message, details={"batch_size": batch_size, "received": received})


class TransportError(QueueError):
    """Wraps a botocore failure with the operation and queue it happened on."""

    error_code = "TransportFailure"

    def __init__(
        self,
        operation: str,
        cause: Exception,
        queue_name: Optional[str] = None,
        queue_url: Optional[str] = None
    ):
        message = f"Encountered an error while attempting to {operation}: {cause}"
        details = {
            "operation": operation,
            "queue_name": queue_name,
            "queue_url": queue_url,
        }
        aws_error = getattr(cause, "response", None)
        if isinstance(aws_error, dict) and "Error" in aws_error:
            details["aws_error_code"] = aws_error["Error"].get("Code")
        super().__init__(message, details=details)
        self.operation = operation
