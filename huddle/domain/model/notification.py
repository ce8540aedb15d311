"""Notification entity."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from huddle.domain.model.common import DomainModel
from huddle.domain.value import (
    CommentId,
    CompanyId,
    NotificationId,
    NotificationType,
    PostId,
    UserId,
)


class Notification(DomainModel):
    """Notification addressed to a single member.

    Created as a side effect of mention parsing, or for the post author when
    someone comments on their post. ``comment_id`` is None for mentions made
    in a top-level comment or post body.
    """

    id: NotificationId
    user_id: UserId
    company_id: CompanyId
    type: NotificationType = NotificationType.MENTION
    title: str
    message: str
    post_id: PostId
    comment_id: Optional[CommentId] = None
    mentioned_by: str
    mentioned_by_id: UserId
    read: bool = False
    created_at: datetime = Field(default_factory=datetime.now)
