"""
Module: test_queue_config.py
Description: Unit tests for QueueConfig and QueueStats models.

Tests defaults, field constraints, FIFO name derivation and the
CreateQueue attribute map.
"""

import pytest
from pydantic import ValidationError

from sqs_drain.models.queue_config import QueueConfig
from sqs_drain.models.stats import QueueStats
from sqs_drain.sqs_queue.exceptions import InvalidQueueNameError


class TestQueueConfig:
    """Test cases for QueueConfig construction and validation."""

    def test_defaults(self):
        config = QueueConfig(queue_name="orders")

        assert config.queue_name == "orders"
        assert config.fifo is False
        assert config.visibility_timeout == 600
        assert config.long_polling_interval == 20
        assert config.batch_size == 1
        assert config.delete_immediately is False
        assert config.message_group_id == "1"
        assert config.is_batched is False

    def test_fifo_suffix_is_appended(self):
        config = QueueConfig(queue_name="orders", fifo=True)

        assert config.queue_name == "orders.fifo"

    def test_fifo_suffix_not_duplicated(self):
        config = QueueConfig(queue_name="orders.fifo", fifo=True)

        assert config.queue_name == "orders.fifo"

    def test_caller_mapping_not_mutated(self):
        """Test that deriving the FIFO name leaves caller input untouched."""
        params = {"queue_name": "orders", "fifo": True}

        config = QueueConfig(**params)
        config_from_dict = QueueConfig.model_validate(params)

        assert params["queue_name"] == "orders"
        assert config.queue_name == config_from_dict.queue_name == "orders.fifo"

    def test_name_validated_after_suffixing(self):
        """A 79 character name is valid alone but too long with '.fifo'."""
        queue_name = "a-queue-name-with-79-chars-that-exceeds-the-limit-when-the-fifo-suffix-is-added"
        assert len(queue_name) == 79
        QueueConfig(queue_name=queue_name)

        with pytest.raises(InvalidQueueNameError, match="characters"):
            QueueConfig(queue_name=queue_name, fifo=True)

    def test_invalid_name_raises_invalid_queue_name(self):
        with pytest.raises(InvalidQueueNameError, match="invalid characters"):
            QueueConfig(queue_name="foo.bar")

        with pytest.raises(InvalidQueueNameError, match="must provide a queue name"):
            QueueConfig(queue_name="")

    @pytest.mark.parametrize("queue_name", [" orders ", "orders\n", "\torders"])
    def test_surrounding_whitespace_is_rejected(self, queue_name):
        """Test that whitespace around a name is refused rather than trimmed."""
        with pytest.raises(InvalidQueueNameError, match="invalid characters"):
            QueueConfig(queue_name=queue_name)

        with pytest.raises(InvalidQueueNameError, match="invalid characters"):
            QueueConfig(queue_name=queue_name, fifo=True)

    def test_missing_name(self):
        with pytest.raises(InvalidQueueNameError):
            QueueConfig()

    def test_is_frozen(self):
        config = QueueConfig(queue_name="orders")

        with pytest.raises(ValidationError):
            config.queue_name = "other"

    @pytest.mark.parametrize("field,value", [
        ("batch_size", 0),
        ("batch_size", 11),
        ("long_polling_interval", -1),
        ("long_polling_interval", 21),
        ("visibility_timeout", -1),
        ("visibility_timeout", 43201),
    ])
    def test_numeric_bounds(self, field, value):
        with pytest.raises(ValidationError):
            QueueConfig(queue_name="orders", **{field: value})

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            QueueConfig(queue_name="orders", region="us-east-1")

    def test_is_batched(self):
        assert QueueConfig(queue_name="orders", batch_size=3).is_batched is True

    def test_standard_queue_attributes(self):
        config = QueueConfig(queue_name="orders", visibility_timeout=30, long_polling_interval=5)

        assert config.queue_attributes() == {
            "VisibilityTimeout": "30",
            "ReceiveMessageWaitTimeSeconds": "5",
        }

    def test_fifo_queue_attributes(self):
        attributes = QueueConfig(queue_name="orders", fifo=True).queue_attributes()

        assert attributes["FifoQueue"] == "true"
        assert attributes["ContentBasedDeduplication"] == "true"
        assert attributes["VisibilityTimeout"] == "600"
        assert attributes["ReceiveMessageWaitTimeSeconds"] == "20"


class TestQueueStats:
    """Test cases for QueueStats."""

    def test_from_attributes(self):
        stats = QueueStats.from_attributes({
            "ApproximateNumberOfMessages": "4",
            "QueueArn": "arn:aws:sqs:us-west-2:123456789012:orders",
        })

        assert stats.message_count == 4
        assert stats.queue_arn == "arn:aws:sqs:us-west-2:123456789012:orders"

    def test_missing_attributes_default_to_empty(self):
        stats = QueueStats.from_attributes({})

        assert stats.message_count == 0
        assert stats.queue_arn == ""

    def test_negative_count_rejected(self):
        with pytest.raises(ValidationError):
            QueueStats(message_count=-1, queue_arn="arn")
