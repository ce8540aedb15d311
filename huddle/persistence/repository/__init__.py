"""PostgreSQL repository implementations."""

from huddle.persistence.repository.comment import PostgresCommentRepository
from huddle.persistence.repository.notification import PostgresNotificationRepository
from huddle.persistence.repository.post import PostgresPostRepository
from huddle.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresCommentRepository",
    "PostgresNotificationRepository",
    "PostgresPostRepository",
    "PostgresUserRepository",
]
