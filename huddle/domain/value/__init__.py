"""Domain value objects for Huddle."""

from huddle.domain.value.identifiers import (
    CommentId,
    CompanyId,
    NotificationId,
    PostId,
    UserId,
)
from huddle.domain.value.types import (
    AuthorContext,
    MentionContext,
    MentionDispatchResult,
    NotificationType,
    Username,
    UserStatus,
)

__all__ = [
    # Identifiers
    "UserId",
    "CompanyId",
    "PostId",
    "CommentId",
    "NotificationId",
    # Types
    "AuthorContext",
    "MentionContext",
    "MentionDispatchResult",
    "NotificationType",
    "Username",
    "UserStatus",
]
