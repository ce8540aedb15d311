"""In-memory notification repository for testing."""

from typing import Optional

from huddle.domain.model.notification import Notification
from huddle.domain.repository.notification import NotificationRepository
from huddle.domain.value import NotificationId, NotificationType, UserId


class InMemoryNotificationRepository(NotificationRepository):
    """In-memory implementation of NotificationRepository for testing."""

    def __init__(self) -> None:
        self._notifications: dict[NotificationId, Notification] = {}

    async def save(self, notification: Notification) -> Notification:
        """Save a notification."""
        self._notifications[notification.id] = notification
        return notification

    async def find_by_id(self, notification_id: NotificationId) -> Optional[Notification]:
        """Find a notification by ID."""
        return self._notifications.get(notification_id)

    async def find_by_user(
        self,
        user_id: UserId,
        type: Optional[NotificationType] = None,
        limit: int = 50,
    ) -> list[Notification]:
        """Find a user's notifications, newest first."""
        notifications = [
            n
            for n in self._notifications.values()
            if n.user_id == user_id and (type is None or n.type == type)
        ]
        notifications.sort(key=lambda n: n.created_at, reverse=True)
        return notifications[:limit]

    async def mark_read(self, notification_id: NotificationId) -> Optional[Notification]:
        """Mark a notification as read."""
        notification = self._notifications.get(notification_id)
        if notification is None:
            return None
        updated = notification.model_copy(update={"read": True})
        self._notifications[notification_id] = updated
        return updated

    def all(self) -> list[Notification]:
        """Every stored notification, in insertion order."""
        return list(self._notifications.values())
