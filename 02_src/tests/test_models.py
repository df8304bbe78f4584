"""Tests for data models."""

from dataclasses import FrozenInstanceError
from datetime import datetime, timezone

import pytest

from delivery_bot.models import (
    CLASSIFIED_INTENTS,
    ClassificationResult,
    DialogRecord,
    ErrorKind,
    Intent,
    Message,
    ReplyResult,
)


class TestIntent:
    """Tests for Intent."""

    def test_values(self):
        """Test the closed intent set."""
        assert {i.value for i in Intent} == {"delivery", "payment", "return", "unknown"}

    def test_classified_order(self):
        """Test the model label order used for tie-breaking."""
        assert [i.value for i in CLASSIFIED_INTENTS] == ["delivery", "payment", "return"]

    def test_classification_result_defaults(self):
        """Test that raw scores are optional."""
        result = ClassificationResult(intent=Intent.UNKNOWN)
        assert result.raw_scores is None


class TestMessage:
    """Tests for Message."""

    def test_message_is_immutable(self):
        """Test that a received message cannot be changed."""
        msg = Message(user_id="u1", text="Hi", received_at=datetime.now(timezone.utc))

        with pytest.raises(FrozenInstanceError):
            msg.text = "changed"  # type: ignore[misc]

    def test_dialog_record_is_immutable(self):
        """Test that dialog records cannot be changed."""
        record = DialogRecord(
            user_id="u1",
            message="Hi",
            intent="unknown",
            timestamp=datetime.now(timezone.utc),
        )

        with pytest.raises(FrozenInstanceError):
            record.intent = "payment"  # type: ignore[misc]


class TestReplyResult:
    """Tests for ReplyResult."""

    def test_success(self):
        """Test a successful reply."""
        result = ReplyResult.success("Order not found.")
        assert result.ok
        assert result.response == "Order not found."
        assert result.error_kind is None

    def test_failure(self):
        """Test an error reply."""
        result = ReplyResult.failure(ErrorKind.MODEL_NOT_READY)
        assert not result.ok
        assert result.response is None
        assert result.error_kind is ErrorKind.MODEL_NOT_READY
