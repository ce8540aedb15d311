"""Submit reply use case."""

import asyncio
from uuid import UUID

import logfire
from pydantic import BaseModel

from huddle.application.usecase.base import BaseUseCase
from huddle.domain.error import NotFoundError, ValidationError
from huddle.domain.repository import PostRepository
from huddle.domain.service import CommentService, CounterService, NotificationService
from huddle.domain.value import AuthorContext, CommentId, MentionContext

from .items import CommentItem, comment_item


class SubmitReplyRequest(BaseModel):
    """Submit reply request."""

    parent_comment_id: str  # UUID string of the comment being answered
    text: str
    author: AuthorContext
    post_id: str | None = None  # Optional cross-check against the parent's post


class SubmitReplyResponse(BaseModel):
    """Submit reply response."""

    comment: CommentItem
    mentions_notified: int


class SubmitReplyUseCase(BaseUseCase):
    """Use case for replying to an existing comment."""

    def __init__(
        self,
        comment_service: CommentService,
        counter_service: CounterService,
        notification_service: NotificationService,
        post_repository: PostRepository,
    ) -> None:
        """Initialize submit reply use case.

        Args:
            comment_service: Comment domain service
            counter_service: Counter maintenance service
            notification_service: Mention notification service
            post_repository: Post repository (title for notifications)
        """
        self.comment_service = comment_service
        self.counter_service = counter_service
        self.notification_service = notification_service
        self.post_repository = post_repository

    async def execute(self, request: SubmitReplyRequest) -> SubmitReplyResponse:
        """Execute submit reply flow.

        The reply lives on the parent's post. Mention notifications point at
        the parent comment, then the parent's reply_count (and, depending on
        configuration, the post total) is incremented.

        Args:
            request: Submit reply request

        Returns:
            Created reply and the number of members notified

        Raises:
            ValidationError: If text is empty or the parent belongs elsewhere
            NotFoundError: If the parent comment or its post does not exist
        """
        parent_id = CommentId(UUID(request.parent_comment_id))
        author = request.author

        with logfire.span(
            "submit_reply.execute",
            parent_comment_id=request.parent_comment_id,
            author_id=str(author.author_id),
        ):
            text = self.comment_service.validate_text(request.text)

            parent = await self.comment_service.get_comment_by_id(parent_id)
            if request.post_id and str(parent.post_id) != request.post_id:
                raise ValidationError("Parent comment does not belong to this post")

            post = await self.post_repository.find_by_id(parent.post_id)
            if not post:
                raise NotFoundError("Post", str(parent.post_id))
            # Checked before the gather below, which writes notifications
            if (
                parent.company_id != author.company_id
                or post.company_id != author.company_id
            ):
                raise ValidationError("Parent comment does not belong to this company")

            context = MentionContext(
                post_id=parent.post_id,
                post_title=post.title,
                author_id=author.author_id,
                author_name=self.comment_service.display_name_for(author),
                comment_id=parent.id,
            )
            reply, dispatch = await asyncio.gather(
                self.comment_service.create_comment(
                    post_id=parent.post_id,
                    author=author,
                    text=text,
                    parent_comment_id=parent.id,
                ),
                self.notification_service.create_mention_notifications(
                    text, author.company_id, context
                ),
            )

            await self.counter_service.on_comment_created(reply)

            return SubmitReplyResponse(
                comment=comment_item(reply),
                mentions_notified=dispatch.count,
            )
