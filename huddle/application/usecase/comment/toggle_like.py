"""Toggle comment like use case."""

from uuid import UUID

from pydantic import BaseModel

from huddle.application.usecase.base import BaseUseCase
from huddle.domain.service import CommentService
from huddle.domain.value import CommentId


class ToggleCommentLikeRequest(BaseModel):
    """Toggle comment like request."""

    comment_id: str  # UUID string
    is_liked: bool  # Whether the member currently likes the comment


class ToggleCommentLikeResponse(BaseModel):
    """Toggle comment like response."""

    comment_id: str
    likes: int
    is_liked: bool


class ToggleCommentLikeUseCase(BaseUseCase):
    """Use case for liking or unliking a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(
        self, request: ToggleCommentLikeRequest
    ) -> ToggleCommentLikeResponse:
        likes = await self.comment_service.toggle_like(
            CommentId(UUID(request.comment_id)), request.is_liked
        )
        return ToggleCommentLikeResponse(
            comment_id=request.comment_id,
            likes=likes,
            is_liked=not request.is_liked,
        )
