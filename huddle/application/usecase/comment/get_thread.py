"""Get thread use case."""

from uuid import UUID

from pydantic import BaseModel

from huddle.application.usecase.base import BaseUseCase
from huddle.domain.service import CommentService
from huddle.domain.value import PostId

from .items import ThreadResponse, thread_response


class GetThreadRequest(BaseModel):
    """Get thread request."""

    post_id: str  # UUID string


class GetThreadUseCase(BaseUseCase):
    """Use case for loading a post's reply tree once."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize get thread use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: GetThreadRequest) -> ThreadResponse:
        """Load the flat comment list and build the reply tree.

        Args:
            request: Get thread request

        Returns:
            Reply tree and total count (an empty thread has an empty tree)
        """
        snapshot = await self.comment_service.get_thread(PostId(UUID(request.post_id)))
        return thread_response(snapshot)
