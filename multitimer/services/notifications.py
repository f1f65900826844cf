"""
Notification sinks

Surfaces halfway, completion and save-failure alerts to the user.
"""

import logging
from abc import ABC, abstractmethod
from collections import deque
from typing import Deque, Iterable, List, Optional

import httpx

from multitimer.models.notification import NotificationKind, TimerNotification

logger = logging.getLogger(__name__)

EXPO_PUSH_URL = "https://exp.host/--/api/v2/push/send"


def build_notification(
    kind: NotificationKind,
    timer_name: str,
    timer_id: Optional[str] = None
) -> TimerNotification:
    """Build the alert text for a timer event"""
    if kind == NotificationKind.HALFWAY:
        title, body = "Halfway There!", f"{timer_name} is 50% complete."
    elif kind == NotificationKind.COMPLETION:
        title, body = "Timer Complete!", f"{timer_name} is done!"
    else:
        title, body = "Save Failed", f"Changes to {timer_name} may not have been saved."
    return TimerNotification(
        kind=kind,
        timer_name=timer_name,
        timer_id=timer_id,
        title=title,
        body=body,
    )


class NotificationSink(ABC):
    """Port for user-facing alerts"""

    @abstractmethod
    async def notify(self, notification: TimerNotification) -> None:
        """Deliver one notification"""


async def notify_timer_event(
    sink: NotificationSink,
    kind: NotificationKind,
    timer_name: str,
    timer_id: Optional[str] = None
) -> TimerNotification:
    """Build a notification for (kind, timer_name) and hand it to the sink"""
    notification = build_notification(kind, timer_name, timer_id)
    await sink.notify(notification)
    return notification


class LoggingNotificationSink(NotificationSink):
    """Writes notifications to the log"""

    async def notify(self, notification: TimerNotification) -> None:
        if notification.kind == NotificationKind.SAVE_FAILED:
            logger.warning(f"{notification.title}: {notification.body}")
        else:
            logger.info(f"{notification.title}: {notification.body}")


class NotificationFeed(NotificationSink):
    """Bounded in-memory buffer of recent notifications, newest first"""

    def __init__(self, max_size: int = 50):
        self._items: Deque[TimerNotification] = deque(maxlen=max_size)

    async def notify(self, notification: TimerNotification) -> None:
        self._items.appendleft(notification)

    def recent(self, limit: Optional[int] = None) -> List[TimerNotification]:
        items = list(self._items)
        return items[:limit] if limit is not None else items

    def clear(self) -> None:
        self._items.clear()


class ExpoPushNotificationSink(NotificationSink):
    """Sends notifications to devices through the Expo Push API"""

    def __init__(
        self,
        push_tokens: Iterable[str],
        push_url: str = EXPO_PUSH_URL,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0
    ):
        self.push_tokens = list(push_tokens)
        self.push_url = push_url
        self._transport = transport
        self._timeout = timeout

    async def notify(self, notification: TimerNotification) -> None:
        if not self.push_tokens:
            return

        messages = [
            {
                "to": token,
                "title": notification.title,
                "body": notification.body,
                "data": {
                    "kind": notification.kind.value,
                    "timerId": notification.timer_id,
                },
                "sound": "default",
                "priority": "high",
                "channelId": "default",
            }
            for token in self.push_tokens
        ]

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.post(
                    self.push_url,
                    json=messages,
                    headers={
                        "Content-Type": "application/json",
                        "Accept": "application/json",
                        "Accept-Encoding": "gzip, deflate",
                    },
                    timeout=self._timeout,
                )
            if response.status_code != 200:
                logger.error(f"Expo push failed with {response.status_code}: {response.text}")
                return
            logger.info(f"Push notification sent to {len(messages)} device(s): {notification.title}")
        except httpx.HTTPError as e:
            logger.error(f"Error sending push notification: {e}")


class CompositeNotificationSink(NotificationSink):
    """Fans a notification out to several sinks; one failing sink does not stop the rest"""

    def __init__(self, sinks: Iterable[NotificationSink]):
        self.sinks = list(sinks)

    async def notify(self, notification: TimerNotification) -> None:
        for sink in self.sinks:
            try:
                await sink.notify(notification)
            except Exception:
                logger.exception(f"Notification sink {sink.__class__.__name__} failed")
