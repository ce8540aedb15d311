"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from huddle.domain.model import Comment, Notification, Post, User
from huddle.domain.value import (
    CommentId,
    CompanyId,
    NotificationId,
    NotificationType,
    PostId,
    UserId,
    Username,
    UserStatus,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def _optional_uuid(value: Any) -> Optional[UUID]:
    return _uuid(value) if value else None


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        company_id=CompanyId(_uuid(row["company_id"])),
        username=Username(row["username"]),
        display_name=row.get("display_name"),
        role=row.get("role"),
        status=UserStatus(row["status"]),
        avatar_url=row.get("avatar_url"),
        created_at=row["created_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict."""
    data = user.model_dump()
    data["username"] = user.username.root
    data["status"] = user.status.value
    return data


def row_to_post(row: Dict[str, Any]) -> Post:
    """Convert database row to Post domain model."""
    return Post(
        id=PostId(_uuid(row["id"])),
        company_id=CompanyId(_uuid(row["company_id"])),
        title=row["title"],
        author_id=UserId(_uuid(row["author_id"])),
        comment_count=row["comment_count"],
        created_at=row["created_at"],
        updated_at=row.get("updated_at"),
    )


def post_to_dict(post: Post) -> Dict[str, Any]:
    """Convert Post domain model to database dict."""
    return post.model_dump()


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    parent_id = _optional_uuid(row.get("parent_comment_id"))
    return Comment(
        id=CommentId(_uuid(row["id"])),
        post_id=PostId(_uuid(row["post_id"])),
        company_id=CompanyId(_uuid(row["company_id"])),
        parent_comment_id=CommentId(parent_id) if parent_id else None,
        author_id=UserId(_uuid(row["author_id"])),
        author_name=row["author_name"],
        author_role=row.get("author_role"),
        is_anonymous=row["is_anonymous"],
        text=row["text"],
        edited=row["edited"],
        edited_at=row.get("edited_at"),
        likes=row["likes"],
        reply_count=row["reply_count"],
        created_at=row["created_at"],
        updated_at=row.get("updated_at"),
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict.

    Args:
        comment: Comment domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return comment.model_dump()


def row_to_notification(row: Dict[str, Any]) -> Notification:
    """Convert database row to Notification domain model."""
    comment_id = _optional_uuid(row.get("comment_id"))
    return Notification(
        id=NotificationId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        company_id=CompanyId(_uuid(row["company_id"])),
        type=NotificationType(row["type"]),
        title=row["title"],
        message=row["message"],
        post_id=PostId(_uuid(row["post_id"])),
        comment_id=CommentId(comment_id) if comment_id else None,
        mentioned_by=row["mentioned_by"],
        mentioned_by_id=UserId(_uuid(row["mentioned_by_id"])),
        read=row["read"],
        created_at=row["created_at"],
    )


def notification_to_dict(notification: Notification) -> Dict[str, Any]:
    """Convert Notification domain model to database dict."""
    data = notification.model_dump()
    data["type"] = notification.type.value
    return data
