"""Adapter layer errors.

Raised by adapters to external systems. Domain code never sees them
directly: the notification dispatcher logs them and moves on.
"""

from discuss.domain.value import NotificationType, UserId


class AdapterError(Exception):
    """Base adapter error."""


class NotificationDeliveryError(AdapterError):
    """A notification could not be written to its destination."""

    def __init__(self, kind: NotificationType, recipient_id: UserId, reason: str):
        self.kind = kind
        self.recipient_id = recipient_id
        super().__init__(
            f"Failed to store {kind.value} notification for {recipient_id}: {reason}"
        )
