"""Get mentions use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from huddle.application.usecase.base import BaseUseCase
from huddle.domain.model import Notification
from huddle.domain.service import NotificationService
from huddle.domain.value import UserId


class NotificationItem(BaseModel):
    """Notification item in response."""

    notification_id: str
    type: str
    title: str
    message: str
    post_id: str
    comment_id: str | None
    mentioned_by: str
    mentioned_by_id: str
    read: bool
    created_at: datetime


class GetMentionsRequest(BaseModel):
    """Get mentions request."""

    user_id: str  # UUID string
    limit: int = Field(default=50, ge=1, le=100)


class GetMentionsResponse(BaseModel):
    """Get mentions response."""

    mentions: list[NotificationItem]
    unread: int


def notification_item(notification: Notification) -> NotificationItem:
    """Convert a notification to its response item."""
    return NotificationItem(
        notification_id=str(notification.id),
        type=notification.type.value,
        title=notification.title,
        message=notification.message,
        post_id=str(notification.post_id),
        comment_id=str(notification.comment_id) if notification.comment_id else None,
        mentioned_by=notification.mentioned_by,
        mentioned_by_id=str(notification.mentioned_by_id),
        read=notification.read,
        created_at=notification.created_at,
    )


class GetMentionsUseCase(BaseUseCase):
    """Use case for listing the mentions addressed to a member."""

    def __init__(self, notification_service: NotificationService) -> None:
        """Initialize get mentions use case.

        Args:
            notification_service: Notification domain service
        """
        self.notification_service = notification_service

    async def execute(self, request: GetMentionsRequest) -> GetMentionsResponse:
        """List mentions, newest first.

        Args:
            request: Get mentions request

        Returns:
            Mentions and how many of them are unread
        """
        mentions = await self.notification_service.get_user_mentions(
            UserId(UUID(request.user_id)), limit=request.limit
        )
        return GetMentionsResponse(
            mentions=[notification_item(n) for n in mentions],
            unread=sum(1 for n in mentions if not n.read),
        )
