"""FastAPI dependencies exposing the engine held on app.state"""
from fastapi import Request

from multitimer.services.history import HistoryLog
from multitimer.services.notifications import NotificationFeed
from multitimer.services.registry import TimerRegistry


def get_registry(request: Request) -> TimerRegistry:
    return request.app.state.registry


def get_history(request: Request) -> HistoryLog:
    return request.app.state.history


def get_notification_feed(request: Request) -> NotificationFeed:
    return request.app.state.notification_feed
