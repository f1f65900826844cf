"""Completion history model"""
from datetime import datetime, timezone
from typing import Any

from pydantic import AliasChoices, BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

# toLocaleString() output written by older clients, e.g. "5/1/2025, 12:00:00 PM"
LEGACY_TIME_FORMATS = ("%m/%d/%Y, %I:%M:%S %p", "%m/%d/%Y, %H:%M:%S")


class HistoryEntry(BaseModel):
    """
    Snapshot of a timer completion.

    ``name`` is copied at completion time and is not a reference to the
    timer. Older clients stored ``completedAt`` as epoch milliseconds, or
    wrote a locale string under ``time``; both are read. A record with no
    completion time is invalid.
    """
    name: str
    completed_at: datetime = Field(
        validation_alias=AliasChoices("completedAt", "completed_at", "time"),
    )

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    @field_validator("completed_at", mode="before")
    @classmethod
    def parse_legacy_time(cls, value: Any) -> Any:
        if not isinstance(value, str):
            return value
        text = value.replace("\u202f", " ").strip()
        for fmt in LEGACY_TIME_FORMATS:
            try:
                return datetime.strptime(text, fmt)
            except ValueError:
                continue
        return value

    @field_validator("completed_at")
    @classmethod
    def ensure_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def to_document(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
