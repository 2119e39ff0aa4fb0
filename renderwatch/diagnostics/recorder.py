"""In-memory notification recorder usable as a notifier."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from renderwatch.api.notification import Notification, NotificationKind
from renderwatch.diagnostics.export import export_jsonl
from renderwatch.diagnostics.ring_buffer import RingBuffer

Subscriber = Callable[[Notification], None]


class NotificationRecorder:
    """Keep recent notifications and fan them out to subscribers."""

    def __init__(self, *, capacity: int = 1_000) -> None:
        self._buffer = RingBuffer[Notification](capacity=capacity)
        self._subscribers: dict[int, Subscriber] = {}
        self._next_subscriber_id = 1
        self._recorded = 0

    @property
    def capacity(self) -> int:
        return self._buffer.capacity

    @property
    def recorded_count(self) -> int:
        return self._recorded

    def __call__(self, notification: Notification) -> None:
        self._buffer.append(notification)
        self._recorded += 1
        for callback in tuple(self._subscribers.values()):
            callback(notification)

    def subscribe(self, callback: Subscriber) -> int:
        token = self._next_subscriber_id
        self._next_subscriber_id += 1
        self._subscribers[token] = callback
        return token

    def unsubscribe(self, token: int) -> None:
        self._subscribers.pop(token, None)

    def clear(self) -> None:
        self._buffer.clear()

    def snapshot(
        self,
        *,
        limit: int | None = None,
        kind: NotificationKind | None = None,
        display_name: str | None = None,
    ) -> list[Notification]:
        notifications = self._buffer.snapshot(limit=limit)
        if kind is not None:
            notifications = [item for item in notifications if item.kind is kind]
        if display_name is not None:
            notifications = [item for item in notifications if item.display_name == display_name]
        return notifications

    def export_jsonl(self, *, path: Path) -> Path:
        return export_jsonl(self._buffer.snapshot(), path=path)
