"""
Module: test_validation.py
Description: Unit tests for queue name validation.

Covers standard and FIFO names, the 80 character limit applied to the
full name, and FIFO suffix derivation.
"""

import pytest

from sqs_drain.sqs_queue.exceptions import InvalidQueueNameError
from sqs_drain.sqs_queue.validation import (
    derive_fifo_name,
    is_fifo_queue_name,
    validate_queue_name,
)


class TestValidateQueueName:
    """Test cases for validate_queue_name."""

    @pytest.mark.parametrize("queue_name", [
        "foo-bar-baz-123",
        "a",
        "UPPER_lower-09",
        "a" * 80,
        "foo-bar-baz-123.fifo",
        "a" * 75 + ".fifo",
    ])
    def test_valid_names(self, queue_name):
        """Test that well-formed names pass."""
        validate_queue_name(queue_name)

    def test_empty_name(self):
        """Test that an empty name is rejected."""
        with pytest.raises(InvalidQueueNameError, match="must provide a queue name"):
            validate_queue_name("")

        with pytest.raises(InvalidQueueNameError, match="must provide a queue name"):
            validate_queue_name(None)

    def test_name_too_long(self):
        """Test the 80 character limit."""
        with pytest.raises(InvalidQueueNameError, match="cannot be longer than 80 characters"):
            validate_queue_name("a" * 81)

    def test_fifo_name_too_long_including_suffix(self):
        """Test that the suffix counts towards the limit."""
        with pytest.raises(InvalidQueueNameError, match="80 characters"):
            validate_queue_name("a" * 76 + ".fifo")

    @pytest.mark.parametrize("queue_name", [
        "foo.bar-baz",
        "foo bar",
        "foo/bar",
        "orders!",
        ".fifo",
        "foo.fifo.fifo",
        "orders\n",
        "orders\n.fifo",
    ])
    def test_invalid_characters(self, queue_name):
        """Test that characters outside [A-Za-z0-9_-] are rejected."""
        with pytest.raises(InvalidQueueNameError, match="contains invalid characters"):
            validate_queue_name(queue_name)

    def test_error_carries_queue_name(self):
        """Test that the error reports the offending name."""
        with pytest.raises(InvalidQueueNameError) as exc_info:
            validate_queue_name("bad name")

        assert exc_info.value.queue_name == "bad name"
        assert exc_info.value.error_code == "InvalidQueueName"
        assert exc_info.value.to_dict()["error"]["details"] == {"queue_name": "bad name"}


class TestFifoNames:
    """Test cases for FIFO suffix detection and derivation."""

    def test_is_fifo_queue_name(self):
        assert is_fifo_queue_name("orders.fifo") is True
        assert is_fifo_queue_name("orders") is False
        assert is_fifo_queue_name("orders-fifo") is False
        assert is_fifo_queue_name("fifo") is False

    def test_derive_appends_suffix(self):
        assert derive_fifo_name("orders", fifo=True) == "orders.fifo"

    def test_derive_keeps_existing_suffix(self):
        assert derive_fifo_name("orders.fifo", fifo=True) == "orders.fifo"

    def test_derive_standard_queue_unchanged(self):
        assert derive_fifo_name("orders", fifo=False) == "orders"

    def test_derived_name_over_limit_fails_validation(self):
        """A 76 character base name exceeds 80 once suffixed."""
        derived = derive_fifo_name("a" * 76, fifo=True)

        with pytest.raises(InvalidQueueNameError, match="80 characters"):
            validate_queue_name(derived)

    def test_derived_name_at_limit_passes(self):
        derived = derive_fifo_name("a" * 75, fifo=True)

        validate_queue_name(derived)
        assert len(derived) == 80
