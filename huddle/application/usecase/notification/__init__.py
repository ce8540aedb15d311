"""Notification use cases."""

from .get_mentions import (
    GetMentionsRequest,
    GetMentionsResponse,
    GetMentionsUseCase,
    NotificationItem,
)
from .mark_read import MarkNotificationReadRequest, MarkNotificationReadUseCase
from .search_mention_candidates import (
    MentionCandidateItem,
    SearchMentionCandidatesRequest,
    SearchMentionCandidatesResponse,
    SearchMentionCandidatesUseCase,
)

__all__ = [
    "GetMentionsRequest",
    "GetMentionsResponse",
    "GetMentionsUseCase",
    "MarkNotificationReadRequest",
    "MarkNotificationReadUseCase",
    "MentionCandidateItem",
    "NotificationItem",
    "SearchMentionCandidatesRequest",
    "SearchMentionCandidatesResponse",
    "SearchMentionCandidatesUseCase",
]
