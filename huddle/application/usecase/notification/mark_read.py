"""Mark notification read use case."""

from uuid import UUID

from pydantic import BaseModel

from huddle.application.usecase.base import BaseUseCase
from huddle.domain.service import NotificationService
from huddle.domain.value import NotificationId

from .get_mentions import NotificationItem, notification_item


class MarkNotificationReadRequest(BaseModel):
    """Mark notification read request."""

    notification_id: str  # UUID string


class MarkNotificationReadUseCase(BaseUseCase):
    """Use case for marking a notification as read."""

    def __init__(self, notification_service: NotificationService) -> None:
        self.notification_service = notification_service

    async def execute(self, request: MarkNotificationReadRequest) -> NotificationItem:
        """Mark the notification read.

        Raises:
            NotFoundError: If the notification does not exist
        """
        notification = await self.notification_service.mark_as_read(
            NotificationId(UUID(request.notification_id))
        )
        return notification_item(notification)
