"""
Module: conftest.py
Description: Shared pytest fixtures for sqs_drain tests.

Provides an in-memory stand-in for the async SQS client built from
AsyncMock and provisioned QueueEngine instances wired to it. The
integration suite talks to a real SQS API served by moto instead.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from factories import (
    QUEUE_URL,
    RecordingFinish,
    RecordingHandler,
    queue_attributes,
    send_batch_ok,
)
from sqs_drain.models.queue_config import QueueConfig
from sqs_drain.sqs_queue.engine import QueueEngine


@pytest.fixture
def queue_url():
    return QUEUE_URL


@pytest.fixture
def mock_sqs():
    """
    Provide a mocked async SQS client.

    Every operation is an AsyncMock; defaults describe an empty queue
    that accepts and deletes everything.
    """
    sqs = MagicMock()
    sqs.create_queue = AsyncMock(return_value={"QueueUrl": QUEUE_URL})
    sqs.delete_queue = AsyncMock(return_value={})
    sqs.send_message_batch = AsyncMock(side_effect=send_batch_ok)
    sqs.receive_message = AsyncMock(return_value={})
    sqs.delete_message_batch = AsyncMock(return_value={"Successful": [], "Failed": []})
    sqs.get_queue_attributes = AsyncMock(return_value=queue_attributes(0))
    return sqs


@pytest.fixture
def handler():
    return RecordingHandler()


@pytest.fixture
def on_finish():
    return RecordingFinish()


@pytest.fixture
def make_engine(mock_sqs, handler, on_finish):
    """
    Build engines against the mocked client.

    Keyword arguments are QueueConfig fields; queue_name defaults to
    'foo-bar-1'. Engines are provisioned unless provisioned=False.
    """
    def _make(provisioned=True, **fields):
        fields.setdefault("queue_name", "foo-bar-1")
        engine = QueueEngine(
            QueueConfig(**fields),
            handler=handler,
            on_finish=on_finish,
            sqs=mock_sqs
        )
        if provisioned:
            engine.queue_url = QUEUE_URL
        return engine

    return _make


@pytest.fixture
def engine(make_engine):
    """Provide a provisioned engine with default configuration."""
    return make_engine()
