"""Timer domain model"""
from enum import Enum

from pydantic import AliasChoices, BaseModel, Field, model_validator
from pydantic.alias_generators import to_camel


class TimerStatus(str, Enum):
    """Timer lifecycle status"""
    PAUSED = "Paused"
    RUNNING = "Running"
    COMPLETED = "Completed"


class Timer(BaseModel):
    """
    A named, categorized countdown.

    Serialized with camelCase keys. Documents written by older clients
    stored the halfway flag as ``halfwayAlert``; both keys are accepted.
    """
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    category: str = Field(min_length=1)
    duration: int = Field(gt=0)  # seconds
    remaining: int
    status: TimerStatus = TimerStatus.PAUSED
    halfway_alert_enabled: bool = Field(
        False,
        validation_alias=AliasChoices("halfwayAlertEnabled", "halfwayAlert", "halfway_alert_enabled"),
    )
    halfway_triggered: bool = False

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    @model_validator(mode="after")
    def check_invariants(self) -> "Timer":
        if not 0 <= self.remaining <= self.duration:
            raise ValueError(
                f"remaining must be within [0, {self.duration}], got {self.remaining}"
            )
        if (self.status == TimerStatus.COMPLETED) != (self.remaining == 0):
            raise ValueError("status must be Completed exactly when remaining is 0")
        if self.halfway_triggered and not self.halfway_alert_enabled:
            raise ValueError("halfwayTriggered requires halfwayAlertEnabled")
        return self

    @property
    def halfway_mark(self) -> int:
        return self.duration // 2

    def to_document(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
