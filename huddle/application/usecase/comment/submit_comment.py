"""Submit comment use case."""

import asyncio
from uuid import UUID

import logfire
from pydantic import BaseModel

from huddle.application.usecase.base import BaseUseCase
from huddle.domain.error import NotFoundError
from huddle.domain.repository import PostRepository
from huddle.domain.service import CommentService, CounterService, NotificationService
from huddle.domain.value import AuthorContext, MentionContext, PostId

from .items import CommentItem, comment_item


class SubmitCommentRequest(BaseModel):
    """Submit comment request."""

    post_id: str  # UUID string
    text: str
    author: AuthorContext  # From the authenticated caller


class SubmitCommentResponse(BaseModel):
    """Submit comment response."""

    comment: CommentItem
    mentions_notified: int
    post_author_notified: bool = False


class SubmitCommentUseCase(BaseUseCase):
    """Use case for posting a top-level comment on a post."""

    def __init__(
        self,
        comment_service: CommentService,
        counter_service: CounterService,
        notification_service: NotificationService,
        post_repository: PostRepository,
    ) -> None:
        """Initialize submit comment use case.

        Args:
            comment_service: Comment domain service
            counter_service: Counter maintenance service
            notification_service: Mention and post author notifications
            post_repository: Post repository (existence check, title)
        """
        self.comment_service = comment_service
        self.counter_service = counter_service
        self.notification_service = notification_service
        self.post_repository = post_repository

    async def execute(self, request: SubmitCommentRequest) -> SubmitCommentResponse:
        """Execute submit comment flow.

        Steps:
        1. Validate text and verify the post exists in the author's tenant
        2. Create the comment, dispatch mention notifications and notify the
           post author concurrently
        3. Increment the post's comment total

        Args:
            request: Submit comment request

        Returns:
            Created comment and the number of members notified

        Raises:
            ValidationError: If text is empty or too long
            NotFoundError: If the post does not exist
        """
        post_id = PostId(UUID(request.post_id))
        author = request.author

        with logfire.span(
            "submit_comment.execute",
            post_id=request.post_id,
            author_id=str(author.author_id),
        ):
            text = self.comment_service.validate_text(request.text)

            post = await self.post_repository.find_by_id(post_id)
            if not post or post.company_id != author.company_id:
                raise NotFoundError("Post", request.post_id)

            context = MentionContext(
                post_id=post_id,
                post_title=post.title,
                author_id=author.author_id,
                author_name=self.comment_service.display_name_for(author),
            )
            # Notification calls never raise, so only the comment write can fail
            comment, dispatch, author_notified = await asyncio.gather(
                self.comment_service.create_comment(
                    post_id=post_id, author=author, text=text
                ),
                self.notification_service.create_mention_notifications(
                    text, author.company_id, context
                ),
                self.notification_service.notify_post_author(post, context),
            )

            await self.counter_service.on_comment_created(comment)

            return SubmitCommentResponse(
                comment=comment_item(comment),
                mentions_notified=dispatch.count,
                post_author_notified=author_notified,
            )
