"""Comment domain service."""

import logfire
from datetime import datetime
from uuid import uuid4

from huddle.config import CommentSettings
from huddle.domain.error import NotFoundError, ValidationError
from huddle.domain.model import Comment, ThreadSnapshot
from huddle.domain.repository import CommentRepository
from huddle.domain.value import AuthorContext, CommentId, PostId

from .base import Service
from .comment_tree import build_comment_tree, count_comments


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(
        self, comment_repository: CommentRepository, settings: CommentSettings
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            settings: Comment settings
        """
        self.comment_repository = comment_repository
        self.settings = settings

    def validate_text(self, text: str) -> str:
        """Normalize comment text and reject empty or oversized input.

        Returns:
            Stripped text

        Raises:
            ValidationError: If text is empty or too long
        """
        stripped = (text or "").strip()
        if not stripped:
            raise ValidationError("Comment text is required")
        if len(stripped) > self.settings.max_text_length:
            raise ValidationError(
                f"Comment text exceeds {self.settings.max_text_length} characters"
            )
        return stripped

    def display_name_for(self, author: AuthorContext) -> str:
        """Name shown for the author, hiding anonymous members."""
        if author.is_anonymous:
            return self.settings.anonymous_display_name
        return author.author_name

    async def create_comment(
        self,
        post_id: PostId,
        author: AuthorContext,
        text: str,
        parent_comment_id: CommentId | None = None,
    ) -> Comment:
        """Create a comment on a post or a reply to another comment.

        Args:
            post_id: Post ID
            author: Authoring member
            text: Comment text
            parent_comment_id: Parent comment ID for replies (None for top-level)

        Returns:
            Created comment

        Raises:
            ValidationError: If text is empty or the parent belongs elsewhere
            NotFoundError: If the parent comment does not exist
        """
        with logfire.span(
            "comment_service.create_comment",
            post_id=str(post_id),
            author_id=str(author.author_id),
            parent_comment_id=str(parent_comment_id) if parent_comment_id else None,
        ):
            text = self.validate_text(text)

            if parent_comment_id:
                parent = await self.comment_repository.find_by_id(parent_comment_id)
                if not parent:
                    logfire.error(
                        "Parent comment not found",
                        parent_comment_id=str(parent_comment_id),
                        post_id=str(post_id),
                    )
                    raise NotFoundError("Comment", str(parent_comment_id))
                if parent.post_id != post_id:
                    logfire.error(
                        "Parent comment does not belong to post",
                        parent_comment_id=str(parent_comment_id),
                        parent_post_id=str(parent.post_id),
                        target_post_id=str(post_id),
                    )
                    raise ValidationError("Parent comment does not belong to this post")
                if parent.company_id != author.company_id:
                    raise ValidationError(
                        "Parent comment does not belong to this company"
                    )

            comment = Comment(
                id=CommentId(uuid4()),
                post_id=post_id,
                company_id=author.company_id,
                parent_comment_id=parent_comment_id,
                author_id=author.author_id,
                author_name=self.display_name_for(author),
                author_role=author.author_role,
                is_anonymous=author.is_anonymous,
                text=text,
                likes=0,
                reply_count=0,
                created_at=datetime.now(),
            )

            saved = await self.comment_repository.save(comment)
            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                post_id=str(post_id),
                is_reply=saved.is_reply,
            )
            return saved

    async def get_comments_for_post(self, post_id: PostId) -> list[Comment]:
        """Get the flat comment list of a post, oldest first.

        Args:
            post_id: Post ID

        Returns:
            Flat list of comments
        """
        with logfire.span(
            "comment_service.get_comments_for_post", post_id=str(post_id)
        ):
            comments = await self.comment_repository.find_by_post(post_id)
            logfire.info(
                "Comments retrieved for post",
                post_id=str(post_id),
                count=len(comments),
            )
            return comments

    async def get_thread(self, post_id: PostId) -> ThreadSnapshot:
        """Load a post's comments once and build the reply tree."""
        comments = await self.get_comments_for_post(post_id)
        tree = build_comment_tree(comments)
        return ThreadSnapshot(post_id=post_id, tree=tree, total_count=count_comments(tree))

    async def get_comment_by_id(self, comment_id: CommentId) -> Comment:
        """Get a comment by ID.

        Args:
            comment_id: Comment ID

        Returns:
            The comment

        Raises:
            NotFoundError: If the comment does not exist
        """
        with logfire.span(
            "comment_service.get_comment_by_id", comment_id=str(comment_id)
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if not comment:
                logfire.warn("Comment not found", comment_id=str(comment_id))
                raise NotFoundError("Comment", str(comment_id))
            return comment

    async def update_text(self, comment_id: CommentId, text: str) -> Comment:
        """Edit the text of a comment.

        Sets ``edited`` and ``edited_at``.

        Args:
            comment_id: Comment ID
            text: New text content

        Returns:
            Updated comment

        Raises:
            ValidationError: If text is empty
            NotFoundError: If the comment no longer exists
        """
        with logfire.span(
            "comment_service.update_text",
            comment_id=str(comment_id),
            text_length=len(text or ""),
        ):
            text = self.validate_text(text)
            updated = await self.comment_repository.update_text(comment_id, text)
            if updated is None:
                logfire.warn(
                    "Comment not found for text update", comment_id=str(comment_id)
                )
                raise NotFoundError("Comment", str(comment_id))

            logfire.info(
                "Comment text updated",
                comment_id=str(comment_id),
                post_id=str(updated.post_id),
                text_length=len(updated.text),
            )
            return updated

    async def delete_comment(self, comment_id: CommentId) -> Comment:
        """Hard delete a comment.

        Replies are not touched; they become orphans and drop out of the
        rebuilt tree.

        Returns:
            The deleted comment, so callers can revert its counters

        Raises:
            NotFoundError: If the comment does not exist
        """
        with logfire.span("comment_service.delete_comment", comment_id=str(comment_id)):
            comment = await self.get_comment_by_id(comment_id)
            await self.comment_repository.delete(comment_id)
            logfire.info(
                "Comment deleted",
                comment_id=str(comment_id),
                post_id=str(comment.post_id),
                reply_count=comment.reply_count,
            )
            return comment

    async def toggle_like(self, comment_id: CommentId, is_liked: bool) -> int:
        """Like or unlike a comment.

        Args:
            comment_id: Comment ID
            is_liked: Whether the member currently likes the comment

        Returns:
            New like count

        Raises:
            NotFoundError: If the comment does not exist
        """
        with logfire.span(
            "comment_service.toggle_like",
            comment_id=str(comment_id),
            is_liked=is_liked,
        ):
            likes = await self.comment_repository.increment_likes(
                comment_id, -1 if is_liked else 1
            )
            if likes is None:
                raise NotFoundError("Comment", str(comment_id))
            logfire.info("Comment likes updated", comment_id=str(comment_id), likes=likes)
            return likes
