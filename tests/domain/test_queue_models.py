"""Tests for batch queue domain models."""

import json

import pytest
from pydantic import ValidationError

from mediaingest.domain.queue import (
    BatchProgress,
    ProcessOutcome,
    QueueItem,
    QueueItemStatus,
    QueueState,
    QueueStatus,
)


class TestQueueStateSerialisation:
    def test_to_json_uses_camel_case_and_lowercase_statuses(self) -> None:
        state = QueueState(
            items=[
                QueueItem(file_id="a", status=QueueItemStatus.COMPLETED, result={"ok": 1}),
                QueueItem(file_id="b", status=QueueItemStatus.ERROR, error="Processing failed"),
            ],
            status=QueueStatus.PROCESSING,
            current_file="b",
        )

        payload = json.loads(state.to_json())

        assert payload["status"] == "processing"
        assert payload["currentFile"] == "b"
        assert payload["items"][0] == {
            "fileId": "a",
            "status": "completed",
            "result": {"ok": 1},
            "error": None,
        }
        assert payload["items"][1]["error"] == "Processing failed"

    def test_current_file_null_is_written(self) -> None:
        payload = json.loads(QueueState().to_json())

        assert payload == {"items": [], "status": "idle", "currentFile": None}

    def test_from_json_reads_camel_case(self) -> None:
        state = QueueState.from_json(
            '{"items": [{"fileId": "x", "status": "pending"}],'
            ' "status": "idle", "currentFile": null}'
        )

        assert state.items[0].file_id == "x"
        assert state.items[0].status == QueueItemStatus.PENDING
        assert state.current_file is None

    def test_from_json_rejects_unknown_status(self) -> None:
        with pytest.raises(ValidationError):
            QueueState.from_json('{"items": [], "status": "exploded"}')


class TestProcessOutcome:
    def test_validates_mapping(self) -> None:
        outcome = ProcessOutcome.model_validate({"success": True, "result": {"n": 1}})

        assert outcome.success is True
        assert outcome.result == {"n": 1}

    def test_result_defaults_to_none(self) -> None:
        assert ProcessOutcome(success=False).result is None


class TestBatchProgress:
    def test_positions_are_one_based(self) -> None:
        with pytest.raises(ValidationError):
            BatchProgress(current=0, total=1, file_id="a", status="processing")

    def test_status_is_restricted(self) -> None:
        with pytest.raises(ValidationError):
            BatchProgress(current=1, total=1, file_id="a", status="completed")
