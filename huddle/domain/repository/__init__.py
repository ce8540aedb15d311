"""Repository interfaces for Huddle domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from huddle.domain.repository.comment import (
    ChangeCallback,
    CommentFeed,
    CommentRepository,
    ErrorCallback,
    Unsubscribe,
)
from huddle.domain.repository.notification import NotificationRepository
from huddle.domain.repository.post import PostRepository
from huddle.domain.repository.user import UserRepository

__all__ = [
    "ChangeCallback",
    "CommentFeed",
    "CommentRepository",
    "ErrorCallback",
    "NotificationRepository",
    "PostRepository",
    "Unsubscribe",
    "UserRepository",
]
