"""Notification sinks and export helpers."""

from renderwatch.diagnostics.export import export_jsonl, notification_to_dict
from renderwatch.diagnostics.json_codec import dumps_bytes, dumps_text
from renderwatch.diagnostics.notifier import LoggingNotifier
from renderwatch.diagnostics.recorder import NotificationRecorder
from renderwatch.diagnostics.ring_buffer import RingBuffer
from renderwatch.diagnostics.schema import NOTIFICATION_SCHEMA_VERSION

__all__ = [
    "LoggingNotifier",
    "NOTIFICATION_SCHEMA_VERSION",
    "NotificationRecorder",
    "RingBuffer",
    "dumps_bytes",
    "dumps_text",
    "export_jsonl",
    "notification_to_dict",
]
