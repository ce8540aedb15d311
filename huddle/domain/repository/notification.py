"""Notification repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from huddle.domain.model.notification import Notification
from huddle.domain.value import NotificationId, NotificationType, UserId


class NotificationRepository(ABC):
    """Repository for Notification entity."""

    @abstractmethod
    async def save(self, notification: Notification) -> Notification:
        """Persist a notification."""
        pass

    @abstractmethod
    async def find_by_id(self, notification_id: NotificationId) -> Optional[Notification]:
        """Find a notification by ID."""
        pass

    @abstractmethod
    async def find_by_user(
        self,
        user_id: UserId,
        type: Optional[NotificationType] = None,
        limit: int = 50,
    ) -> List[Notification]:
        """Find notifications addressed to a user, newest first.

        Args:
            user_id: Recipient
            type: Only return notifications of this type
            limit: Maximum number of notifications

        Returns:
            Notifications ordered by created_at descending
        """
        pass

    @abstractmethod
    async def mark_read(self, notification_id: NotificationId) -> Optional[Notification]:
        """Mark a notification as read.

        Returns:
            Updated notification, or None if it does not exist
        """
        pass
