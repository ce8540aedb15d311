"""Delete comment use case."""

from uuid import UUID

from pydantic import BaseModel

from huddle.application.usecase.base import BaseUseCase
from huddle.domain.error import NotFoundError
from huddle.domain.service import CommentService, CounterService
from huddle.domain.value import CommentId


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: str  # UUID string
    post_id: str  # UUID string (for validation)


class DeleteCommentUseCase(BaseUseCase):
    """Use case for hard deleting a comment and reverting its counters."""

    def __init__(
        self, comment_service: CommentService, counter_service: CounterService
    ) -> None:
        """Initialize delete comment use case.

        Args:
            comment_service: Comment domain service
            counter_service: Counter maintenance service
        """
        self.comment_service = comment_service
        self.counter_service = counter_service

    async def execute(self, request: DeleteCommentRequest) -> None:
        """Delete the comment, then decrement what its creation incremented.

        Replies of the deleted comment stay in the store and drop out of the
        rebuilt tree.

        Raises:
            NotFoundError: If the comment does not exist on this post
        """
        comment_id = CommentId(UUID(request.comment_id))

        comment = await self.comment_service.get_comment_by_id(comment_id)
        if str(comment.post_id) != request.post_id:
            raise NotFoundError("Comment", request.comment_id)

        deleted = await self.comment_service.delete_comment(comment_id)
        await self.counter_service.on_comment_deleted(deleted)
