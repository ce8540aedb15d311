"""Aggregate counter maintenance for comments."""

import logfire

from huddle.config import CommentSettings
from huddle.domain.model import Comment
from huddle.domain.repository import CommentRepository, PostRepository

from .base import Service


class CounterService(Service):
    """Keeps post comment totals and per-comment reply counts in step.

    Every update is an atomic store-level increment, never a
    read-modify-write, so concurrent commenters cannot lose updates.

    Effects per comment write:

    =====================  =====================  =============================
    write                  count_replies=True     count_replies=False
    =====================  =====================  =============================
    create top-level       post +1                post +1
    create reply           parent +1, post +1     parent +1
    delete                 mirror of create (-1)  mirror of create (-1)
    =====================  =====================  =============================
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        post_repository: PostRepository,
        settings: CommentSettings,
    ) -> None:
        """Initialize counter service.

        Args:
            comment_repository: Comment repository (reply counts)
            post_repository: Post repository (post comment totals)
            settings: Comment settings selecting the post total convention
        """
        self.comment_repository = comment_repository
        self.post_repository = post_repository
        self.count_replies_in_post_total = settings.count_replies_in_post_total

    async def on_comment_created(self, comment: Comment) -> None:
        """Apply counter increments for a newly created comment."""
        await self._apply(comment, delta=1)

    async def on_comment_deleted(self, comment: Comment) -> None:
        """Revert the increments applied when ``comment`` was created."""
        await self._apply(comment, delta=-1)

    async def _apply(self, comment: Comment, delta: int) -> None:
        with logfire.span(
            "counter_service.apply",
            comment_id=str(comment.id),
            post_id=str(comment.post_id),
            is_reply=comment.is_reply,
            delta=delta,
        ):
            if comment.parent_comment_id is not None:
                await self.comment_repository.increment_reply_count(
                    comment.parent_comment_id, delta
                )
                if self.count_replies_in_post_total:
                    await self.post_repository.increment_comment_count(
                        comment.post_id, delta
                    )
            else:
                await self.post_repository.increment_comment_count(
                    comment.post_id, delta
                )
            logfire.info(
                "Comment counters updated",
                comment_id=str(comment.id),
                post_id=str(comment.post_id),
                delta=delta,
            )
