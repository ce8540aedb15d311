"""Update comment use case."""

from uuid import UUID

from pydantic import BaseModel

from huddle.application.usecase.base import BaseUseCase
from huddle.domain.error import NotFoundError
from huddle.domain.service import CommentService
from huddle.domain.value import CommentId

from .items import CommentItem, comment_item


class UpdateCommentRequest(BaseModel):
    """Update comment request."""

    comment_id: str  # UUID string
    post_id: str  # UUID string (for validation)
    text: str  # New text content (required, cannot be empty)


class UpdateCommentUseCase(BaseUseCase):
    """Use case for editing a comment's text."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize update comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: UpdateCommentRequest) -> CommentItem:
        """Execute update comment flow.

        Args:
            request: Update comment request with comment ID, post ID and new text

        Returns:
            Updated comment (``edited`` set)

        Raises:
            ValidationError: If text is empty
            NotFoundError: If the comment does not exist on this post
        """
        comment_id = CommentId(UUID(request.comment_id))

        comment = await self.comment_service.get_comment_by_id(comment_id)
        if str(comment.post_id) != request.post_id:
            raise NotFoundError("Comment", request.comment_id)

        updated = await self.comment_service.update_text(comment_id, request.text)
        return comment_item(updated)
