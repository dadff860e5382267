"""Notification sinks."""

from .recording import RecordedNotification, RecordingNotificationSink
from .sink import DatabaseNotificationSink

__all__ = [
    "DatabaseNotificationSink",
    "RecordedNotification",
    "RecordingNotificationSink",
]
