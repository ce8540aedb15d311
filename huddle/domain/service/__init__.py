"""Domain services."""

from .base import Service
from .comment_service import CommentService
from .comment_tree import build_comment_tree, count_comments, flatten_comment_tree
from .counter_service import CounterService
from .mention_parser import (
    Mention,
    TextSegment,
    extract_mentioned_usernames,
    highlight_mentions,
    is_valid_mention_format,
    parse_mentions,
)
from .notification_service import NotificationService
from .thread_sync import SubscriptionState, ThreadSubscription, ThreadSyncController

__all__ = [
    "CommentService",
    "CounterService",
    "Mention",
    "NotificationService",
    "Service",
    "SubscriptionState",
    "TextSegment",
    "ThreadSubscription",
    "ThreadSyncController",
    "build_comment_tree",
    "count_comments",
    "extract_mentioned_usernames",
    "flatten_comment_tree",
    "highlight_mentions",
    "is_valid_mention_format",
    "parse_mentions",
]
