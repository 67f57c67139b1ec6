"""
Module: engine.py
Description: SQS queue engine for provisioning, filling and draining queues.

Key Components:
- QueueEngine.create(): Create the queue with attributes derived from config
- QueueEngine.fill(): Enqueue messages in sequential batches of ten
- QueueEngine.process(): Long-poll, dispatch to the handler, delete, and
  stop once the queue reports no visible messages
- QueueEngine.delete() / get_stats() / get_queue_size(): Lifecycle and inspection

Dependencies: aioboto3, botocore, tenacity (optional retry policy)
"""

import asyncio
from contextlib import asynccontextmanager
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from aioboto3 import Session
from botocore.exceptions import BotoCoreError, ClientError
from tenacity import AsyncRetrying

from sqs_drain.config.constants import MAX_BATCH_ENTRIES
from sqs_drain.config.settings import settings
from sqs_drain.models.queue_config import QueueConfig
from sqs_drain.models.stats import QueueStats
from sqs_drain.utils.batch_helpers import cast_list, chunk_list
from sqs_drain.utils.logger import get_logger
from .exceptions import (
    NotProvisionedError,
    PartialDeleteFailure,
    PartialSendFailure,
    TransportError,
    UnexpectedBatchSizeError,
)
from .handlers import (
    FinishHandler,
    MessageHandler,
    Payload,
    as_finish_handler,
    as_message_handler,
    dispatch,
    notify_finished,
)

logger = get_logger(__name__)

STATS_ATTRIBUTE_NAMES = ['ApproximateNumberOfMessages', 'QueueArn']


class QueueEngine:
    """
    Handle on a single SQS queue.

    A handle is created once per logical queue, provisioned with create(),
    optionally loaded with fill(), and drained with process(). Only one
    process() loop may run per handle at a time.

    Attributes:
        config: Immutable queue configuration
        queue_url: Queue URL, set by create() and cleared by delete()
        handler: Strategy receiving message bodies
        on_finish: Strategy invoked when the queue is observed empty
        retry_policy: Optional tenacity policy wrapping handler calls

    Example:
        >>> engine = QueueEngine(queue_name="orders", fifo=True, handler=print)
        >>> await engine.create()
        >>> await engine.fill(["a", "b", "c"])
        >>> await engine.process()
    """

    def __init__(
        self,
        config: Optional[QueueConfig] = None,
        *,
        handler: Optional[Union[MessageHandler, Callable]] = None,
        on_finish: Optional[Union[FinishHandler, Callable]] = None,
        sqs: Any = None,
        session: Optional[Session] = None,
        retry_policy: Optional[AsyncRetrying] = None,
        **config_fields: Any
    ):
        """
        Initialize the queue engine.

        Args:
            config: Queue configuration; alternatively pass its fields as keywords
            handler: MessageHandler or callable receiving message bodies
            on_finish: FinishHandler or zero-argument callable
            sqs: Pre-built async SQS client; when omitted a client is opened
                from the aioboto3 session for each operation
            session: aioboto3 session used when no client is injected
            retry_policy: tenacity AsyncRetrying used to retry handler calls

        Raises:
            InvalidQueueNameError: If the queue name is invalid
            ValueError: If both config and config keywords are given
        """
        if config is not None and config_fields:
            raise ValueError("Pass either a QueueConfig or its fields, not both")

        self.config = config if config is not None else QueueConfig(**config_fields)
        self.queue_url: Optional[str] = None

        self.handler = as_message_handler(handler)
        self.on_finish = as_finish_handler(on_finish)
        self.retry_policy = retry_policy

        self.sqs = sqs
        self.session = session or Session()

        logger.info(
            "Queue engine initialized",
            queue_name=self.config.queue_name,
            fifo=self.config.fifo,
            batch_size=self.config.batch_size,
            delete_immediately=self.config.delete_immediately
        )

    @property
    def queue_name(self) -> str:
        return self.config.queue_name

    @property
    def fifo(self) -> bool:
        return self.config.fifo

    @asynccontextmanager
    async def _client(self):
        if self.sqs is not None:
            yield self.sqs
            return

        async with self.session.client(
            'sqs',
            region_name=settings.aws_region,
            endpoint_url=settings.sqs_endpoint_url
        ) as sqs:
            yield sqs

    def _require_provisioned(self, operation: str) -> str:
        if not self.queue_url:
            raise NotProvisionedError(self.queue_name, operation)
        return self.queue_url

    async def _call(self, sqs: Any, action: str, operation: str, **kwargs: Any) -> Dict[str, Any]:
        """
        Invoke one SQS operation, wrapping botocore failures in TransportError.

        Args:
            sqs: Async SQS client
            action: Human-readable description used in errors and logs
            operation: Client method name (e.g. 'receive_message')
            **kwargs: Request parameters

        Raises:
            TransportError: If the request fails
        """
        try:
            return await getattr(sqs, operation)(**kwargs)

        except ClientError as e:
            logger.error(
                "SQS request failed",
                action=action,
                queue_name=self.queue_name,
                error_code=e.response['Error'].get('Code'),
                error_message=e.response['Error'].get('Message')
            )
            raise TransportError(action, e, self.queue_name, self.queue_url) from e

        except BotoCoreError as e:
            logger.error(
                "SQS client error",
                action=action,
                queue_name=self.queue_name,
                error=str(e),
                error_type=type(e).__name__
            )
            raise TransportError(action, e, self.queue_name, self.queue_url) from e

    async def create(self) -> str:
        """
        Create the queue. Must be called before fill() or process().

        CreateQueue is idempotent for identical attributes, so calling this
        against an existing queue simply returns its URL.

        Returns:
            The queue URL

        Raises:
            TransportError: If CreateQueue fails
        """
        attributes = self.config.queue_attributes()

        async with self._client() as sqs:
            response = await self._call(
                sqs,
                "create the queue",
                'create_queue',
                QueueName=self.queue_name,
                Attributes=attributes
            )

        self.queue_url = response['QueueUrl']
        logger.info(
            "Queue created",
            queue_name=self.queue_name,
            queue_url=self.queue_url,
            attributes=attributes
        )
        return self.queue_url

    async def fill(self, messages: Union[str, Sequence[str]]) -> List[str]:
        """
        Add message(s) to the queue.

        Messages are sent in chunks of ten, one chunk at a time, so FIFO
        queues receive them in the order given.

        Args:
            messages: A single message body or a sequence of bodies

        Returns:
            SQS message ids of the sent messages, in order

        Raises:
            NotProvisionedError: If create() has not succeeded
            PartialSendFailure: If any entry of a chunk is rejected; later
                chunks are not sent
            TransportError: If SendMessageBatch fails
            ValueError: If a message is not a string
        """
        queue_url = self._require_provisioned("fill")
        bodies = cast_list(messages)
        for body in bodies:
            if not isinstance(body, str):
                raise ValueError("messages must be strings")

        message_ids: List[str] = []
        async with self._client() as sqs:
            # Sequential on purpose: concurrent chunks could reorder FIFO messages
            for chunk in chunk_list(bodies, MAX_BATCH_ENTRIES):
                response = await self._call(
                    sqs,
                    "enqueue messages",
                    'send_message_batch',
                    QueueUrl=queue_url,
                    Entries=self._encode_batch(chunk)
                )

                failed = response.get('Failed') or []
                if failed:
                    failures = self._describe_failures(failed, chunk)
                    logger.error(
                        "Failed to enqueue messages",
                        queue_name=self.queue_name,
                        failed_count=len(failures),
                        sent_before_failure=len(message_ids)
                    )
                    raise PartialSendFailure(queue_url, failures)

                successful = sorted(
                    response.get('Successful') or [],
                    key=lambda entry: int(entry['Id'])
                )
                message_ids.extend(entry['MessageId'] for entry in successful)

        logger.info(
            "Messages enqueued",
            queue_name=self.queue_name,
            message_count=len(bodies)
        )
        return message_ids

    def _encode_batch(self, bodies: List[str]) -> List[Dict[str, str]]:
        """
        Build SendMessageBatch entries with chunk-local ids.

        FIFO queues need a MessageGroupId; all messages of a handle share one
        group, so ordering is kept across the whole handle.
        """
        entries = []
        for index, body in enumerate(bodies):
            entry = {'Id': str(index), 'MessageBody': body}
            if self.fifo:
                entry['MessageGroupId'] = self.config.message_group_id
            entries.append(entry)
        return entries

    async def process(self, stop_event: Optional[asyncio.Event] = None) -> int:
        """
        Drain the queue, dispatching messages to the handler.

        Each iteration long-polls for up to batch_size messages, passes them
        to the handler, deletes them (before the handler when
        delete_immediately is set, after it otherwise), then checks the
        approximate visible message count. When it reaches zero the finish
        callback runs and the loop returns.

        Args:
            stop_event: Optional event checked before each receive; when set
                the loop returns without calling the finish callback

        Returns:
            Number of messages dispatched to the handler

        Raises:
            NotProvisionedError: If create() has not succeeded
            UnexpectedBatchSizeError: If batch_size is 1 and SQS returns more
            PartialDeleteFailure: If SQS rejects a message deletion
            TransportError: If any SQS request fails
            Exception: Whatever the handler raises
        """
        queue_url = self._require_provisioned("process")
        dispatched = 0

        logger.info("Queue processing started", queue_name=self.queue_name, queue_url=queue_url)

        async with self._client() as sqs:
            while True:
                if stop_event is not None and stop_event.is_set():
                    logger.info(
                        "Queue processing stopped",
                        queue_name=self.queue_name,
                        dispatched=dispatched
                    )
                    return dispatched

                messages = await self._receive_messages(sqs, queue_url)

                if messages:
                    if self.config.delete_immediately:
                        await self._delete_messages(sqs, queue_url, messages)

                    await self._handle_messages(messages)
                    dispatched += len(messages)

                    if not self.config.delete_immediately:
                        await self._delete_messages(sqs, queue_url, messages)

                # Check the size whether or not this poll returned anything
                stats = await self._fetch_stats(sqs, queue_url)
                if stats.message_count == 0:
                    logger.info(
                        "Queue drained",
                        queue_name=self.queue_name,
                        dispatched=dispatched
                    )
                    await notify_finished(self.on_finish)
                    return dispatched

                logger.debug(
                    "Messages remaining",
                    queue_name=self.queue_name,
                    message_count=stats.message_count
                )

    async def _receive_messages(self, sqs: Any, queue_url: str) -> List[Dict[str, Any]]:
        response = await self._call(
            sqs,
            "receive messages",
            'receive_message',
            QueueUrl=queue_url,
            MaxNumberOfMessages=self.config.batch_size,
            WaitTimeSeconds=self.config.long_polling_interval
        )
        messages = response.get('Messages') or []
        logger.debug(
            "Messages received",
            queue_name=self.queue_name,
            received=len(messages)
        )
        return messages

    async def _handle_messages(self, messages: List[Dict[str, Any]]) -> None:
        bodies = [self._extract_message_body(message) for message in messages]

        if not self.config.is_batched:
            if len(bodies) != 1:
                raise UnexpectedBatchSizeError(self.config.batch_size, len(bodies))
            payload: Payload = bodies[0]
        else:
            payload = bodies

        await self._invoke_handler(payload)

    async def _invoke_handler(self, payload: Payload) -> None:
        if self.retry_policy is None:
            await dispatch(self.handler, payload)
            return

        async for attempt in self.retry_policy.copy():
            with attempt:
                await dispatch(self.handler, payload)

    @staticmethod
    def _extract_message_body(message: Dict[str, Any]) -> str:
        return message['Body']

    async def _delete_messages(self, sqs: Any, queue_url: str, messages: List[Dict[str, Any]]) -> None:
        """
        Delete received messages by receipt handle.

        Raises:
            PartialDeleteFailure: If any deletion is rejected, e.g. because the
                visibility timeout expired and the receipt handle went stale
        """
        for chunk in chunk_list(messages, MAX_BATCH_ENTRIES):
            entries = [
                {'Id': str(index), 'ReceiptHandle': message.get('ReceiptHandle')}
                for index, message in enumerate(chunk)
            ]
            response = await self._call(
                sqs,
                "delete messages",
                'delete_message_batch',
                QueueUrl=queue_url,
                Entries=entries
            )

            failed = response.get('Failed') or []
            if failed:
                failures = self._describe_failures(
                    failed,
                    [message.get('Body') for message in chunk]
                )
                logger.error(
                    "Failed to delete messages",
                    queue_name=self.queue_name,
                    failed_count=len(failures)
                )
                raise PartialDeleteFailure(queue_url, failures)

        logger.debug("Messages deleted", queue_name=self.queue_name, deleted=len(messages))

    @staticmethod
    def _describe_failures(failed: List[Dict[str, Any]], bodies: List[str]) -> List[Dict[str, Any]]:
        """Map batch 'Failed' entries back to the bodies they were sent or received with."""
        failures = []
        for entry in failed:
            entry_id = str(entry.get('Id', ''))
            body = None
            if entry_id.isdigit() and int(entry_id) < len(bodies):
                body = bodies[int(entry_id)]
            failures.append({
                'id': entry_id,
                'body': body,
                'code': entry.get('Code'),
                'reason': entry.get('Message'),
                'sender_fault': entry.get('SenderFault'),
            })
        return failures

    async def delete(self) -> None:
        """
        Delete the queue.

        No local provisioning check is made: deleting a queue that was never
        created or is already gone surfaces the error SQS reports.

        Raises:
            TransportError: If DeleteQueue fails
        """
        async with self._client() as sqs:
            await self._call(
                sqs,
                "delete the queue",
                'delete_queue',
                QueueUrl=self.queue_url or ''
            )

        logger.info("Queue deleted", queue_name=self.queue_name, queue_url=self.queue_url)
        self.queue_url = None

    async def get_queue_size(self) -> int:
        """Fetch the current approximate count of visible messages."""
        stats = await self.get_stats()
        return stats.message_count

    async def get_stats(self) -> QueueStats:
        """
        Fetch the approximate visible message count and the queue ARN.

        Raises:
            NotProvisionedError: If create() has not succeeded
            TransportError: If GetQueueAttributes fails
        """
        queue_url = self._require_provisioned("get_stats")
        async with self._client() as sqs:
            return await self._fetch_stats(sqs, queue_url)

    async def _fetch_stats(self, sqs: Any, queue_url: str) -> QueueStats:
        response = await self._call(
            sqs,
            "fetch queue attributes",
            'get_queue_attributes',
            QueueUrl=queue_url,
            AttributeNames=STATS_ATTRIBUTE_NAMES
        )
        return QueueStats.from_attributes(response.get('Attributes') or {})
