"""Domain model entities for Huddle."""

from huddle.domain.model.comment import Comment, CommentNode
from huddle.domain.model.notification import Notification
from huddle.domain.model.post import Post
from huddle.domain.model.thread import ThreadSnapshot
from huddle.domain.model.user import User

__all__ = [
    "Comment",
    "CommentNode",
    "Notification",
    "Post",
    "ThreadSnapshot",
    "User",
]
