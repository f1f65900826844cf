"""Request/Response models shared by the API routers"""
from typing import Any, List

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from multitimer.models.timer import Timer
from multitimer.utils.time_format import format_time, progress, progress_percent


class TimerView(Timer):
    """Timer as shown to clients, with display fields"""
    remaining_formatted: str
    progress: float
    progress_percent: int

    @classmethod
    def from_timer(cls, timer: Timer) -> "TimerView":
        return cls(
            **timer.model_dump(),
            remaining_formatted=format_time(timer.remaining),
            progress=progress(timer),
            progress_percent=progress_percent(timer),
        )


class CreateTimerRequest(BaseModel):
    name: str
    category: str
    duration: Any = Field(description="Duration in whole seconds")
    halfway_alert_enabled: bool = False

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class TimerResponse(BaseModel):
    timer: TimerView


class TimerListResponse(BaseModel):
    timers: List[TimerView]
    count: int


class CategoryGroup(BaseModel):
    category: str
    timers: List[TimerView]


class GroupedTimersResponse(BaseModel):
    groups: List[CategoryGroup]


class BulkOperationResponse(BaseModel):
    category: str
    timers: List[TimerView]
    count: int


def to_views(timers: List[Timer]) -> List[TimerView]:
    return [TimerView.from_timer(timer) for timer in timers]
