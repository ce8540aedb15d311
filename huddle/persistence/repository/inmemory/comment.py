"""In-memory comment repository and live feed for testing."""

from datetime import datetime
from itertools import count
from typing import Optional

import logfire

from huddle.domain.model.comment import Comment
from huddle.domain.repository.comment import (
    ChangeCallback,
    CommentFeed,
    CommentRepository,
    ErrorCallback,
    Unsubscribe,
)
from huddle.domain.value import CommentId, PostId


class InMemoryCommentRepository(CommentRepository, CommentFeed):
    """In-memory implementation of CommentRepository for testing.

    Also acts as the live feed: every write pushes the post's full comment
    list to its subscribers synchronously.
    """

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}
        self._listeners: dict[PostId, dict[int, tuple[ChangeCallback, ErrorCallback]]] = {}
        self._listener_ids = count()

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_by_post(self, post_id: PostId) -> list[Comment]:
        """Find all comments for a post, oldest first."""
        return self._snapshot(post_id)

    async def save(self, comment: Comment) -> Comment:
        """Save or update a comment."""
        self._comments[comment.id] = comment
        self._publish(comment.post_id)
        return comment

    async def update_text(self, comment_id: CommentId, text: str) -> Comment | None:
        """Replace text and mark the comment as edited."""
        comment = self._comments.get(comment_id)
        if comment is None:
            return None
        updated = comment.model_copy(
            update={"text": text, "edited": True, "edited_at": datetime.now()}
        )
        self._comments[comment_id] = updated
        self._publish(comment.post_id)
        return updated

    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment."""
        comment = self._comments.pop(comment_id, None)
        if comment is not None:
            self._publish(comment.post_id)

    async def increment_reply_count(self, comment_id: CommentId, delta: int) -> None:
        """Add delta to reply_count (minimum 0)."""
        comment = self._comments.get(comment_id)
        if comment:
            self._comments[comment_id] = comment.model_copy(
                update={
                    "reply_count": max(0, comment.reply_count + delta),
                    "updated_at": datetime.now(),
                }
            )
            self._publish(comment.post_id)

    async def increment_likes(self, comment_id: CommentId, delta: int) -> int | None:
        """Add delta to likes (minimum 0)."""
        comment = self._comments.get(comment_id)
        if comment is None:
            return None
        likes = max(0, comment.likes + delta)
        self._comments[comment_id] = comment.model_copy(
            update={"likes": likes, "updated_at": datetime.now()}
        )
        self._publish(comment.post_id)
        return likes

    async def subscribe(
        self,
        post_id: PostId,
        on_change: ChangeCallback,
        on_error: ErrorCallback,
    ) -> Unsubscribe:
        """Register a listener and push the current list right away."""
        listener_id = next(self._listener_ids)
        self._listeners.setdefault(post_id, {})[listener_id] = (on_change, on_error)

        def unsubscribe() -> None:
            listeners = self._listeners.get(post_id)
            if listeners is not None:
                listeners.pop(listener_id, None)
                if not listeners:
                    del self._listeners[post_id]

        on_change(self._snapshot(post_id))
        return unsubscribe

    def listener_count(self, post_id: PostId) -> int:
        """Number of live subscriptions on a post."""
        return len(self._listeners.get(post_id, {}))

    def fail(self, post_id: PostId, error: Exception) -> None:
        """Report a live query failure to every listener of a post."""
        for _, on_error in list(self._listeners.get(post_id, {}).values()):
            on_error(error)

    def _snapshot(self, post_id: PostId) -> list[Comment]:
        comments = [c for c in self._comments.values() if c.post_id == post_id]
        # Stable sort keeps insertion order for equal timestamps
        comments.sort(key=lambda c: c.created_at)
        return comments

    def _publish(self, post_id: PostId) -> None:
        listeners = list(self._listeners.get(post_id, {}).values())
        if not listeners:
            return
        snapshot = self._snapshot(post_id)
        for on_change, on_error in listeners:
            try:
                on_change(list(snapshot))
            except Exception as e:
                logfire.error(
                    "Comment listener failed", post_id=str(post_id), error=str(e)
                )
                on_error(e)
