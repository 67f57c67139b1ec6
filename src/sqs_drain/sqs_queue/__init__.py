"""
Package: sqs_queue
Description: SQS queue lifecycle and consumption.

Provides the QueueEngine used to create, fill, drain and delete
SQS queues, along with queue name validation and the error types
raised by those operations.
"""
