"""Tests for the domain models and display helpers"""
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError as PydanticValidationError

from multitimer.models.history import HistoryEntry
from multitimer.models.timer import Timer, TimerStatus
from multitimer.utils.time_format import format_time, progress, progress_percent


def timer_record(**overrides):
    record = {
        "id": "1",
        "name": "Plank",
        "category": "Workout",
        "duration": 60,
        "remaining": 60,
        "status": "Paused",
        "halfwayAlertEnabled": False,
        "halfwayTriggered": False,
    }
    record.update(overrides)
    return record


class TestTimer:
    def test_serializes_with_camel_case_keys(self):
        timer = Timer.model_validate(timer_record(halfwayAlertEnabled=True))
        assert timer.to_document() == timer_record(halfwayAlertEnabled=True)

    def test_accepts_legacy_halfway_key(self):
        record = timer_record()
        del record["halfwayAlertEnabled"]
        record["halfwayAlert"] = True

        timer = Timer.model_validate(record)

        assert timer.halfway_alert_enabled is True
        assert "halfwayAlertEnabled" in timer.to_document()

    @pytest.mark.parametrize(
        "overrides",
        [
            {"remaining": 61},
            {"remaining": -1},
            {"duration": 0, "remaining": 0, "status": "Completed"},
            {"remaining": 0, "status": "Paused"},
            {"remaining": 5, "status": "Completed"},
            {"halfwayTriggered": True, "halfwayAlertEnabled": False},
            {"name": ""},
            {"status": "Stopped"},
        ],
    )
    def test_rejects_records_that_break_invariants(self, overrides):
        with pytest.raises(PydanticValidationError):
            Timer.model_validate(timer_record(**overrides))

    def test_completed_record_is_valid(self):
        timer = Timer.model_validate(timer_record(remaining=0, status="Completed"))
        assert timer.status == TimerStatus.COMPLETED

    def test_halfway_mark_is_floored(self):
        assert Timer.model_validate(timer_record(duration=7, remaining=7)).halfway_mark == 3


class TestHistoryEntry:
    def test_reads_epoch_milliseconds(self):
        entry = HistoryEntry.model_validate({"name": "Tea", "completedAt": 1700000000000})
        assert entry.completed_at == datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)

    def test_naive_timestamps_are_treated_as_utc(self):
        entry = HistoryEntry(name="Tea", completed_at=datetime(2025, 5, 1, 12, 0, 0))
        assert entry.completed_at.tzinfo == timezone.utc

    def test_document_uses_iso_timestamp(self):
        entry = HistoryEntry(name="Tea", completed_at=datetime(2025, 5, 1, 12, 0, 0, tzinfo=timezone.utc))
        assert entry.to_document() == {"name": "Tea", "completedAt": "2025-05-01T12:00:00Z"}


class TestTimeFormat:
    @pytest.mark.parametrize(
        "seconds, expected",
        [(0, "0:00"), (5, "0:05"), (65, "1:05"), (600, "10:00"), (3725, "62:05")],
    )
    def test_format_time(self, seconds, expected):
        assert format_time(seconds) == expected

    def test_progress(self):
        timer = Timer.model_validate(timer_record(duration=60, remaining=15))
        assert progress(timer) == 0.25
        assert progress_percent(timer) == 25

    def test_reads_legacy_locale_time(self):
        entry = HistoryEntry.model_validate({"name": "Tea", "time": "5/1/2025, 12:00:00 PM"})
        assert entry.completed_at == datetime(2025, 5, 1, 12, 0, 0, tzinfo=timezone.utc)
        assert entry.to_document() == {"name": "Tea", "completedAt": "2025-05-01T12:00:00Z"}

    def test_reads_legacy_locale_time_with_narrow_space(self):
        entry = HistoryEntry.model_validate({"name": "Tea", "time": "11/3/2024, 9:05:07\u202fAM"})
        assert entry.completed_at == datetime(2024, 11, 3, 9, 5, 7, tzinfo=timezone.utc)

    @pytest.mark.parametrize("record", [{"name": "Tea"}, {"name": "Tea", "time": "sometime yesterday"}])
    def test_rejects_records_without_a_completion_time(self, record):
        with pytest.raises(PydanticValidationError):
            HistoryEntry.model_validate(record)
