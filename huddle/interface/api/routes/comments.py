"""Comment routes."""

from uuid import UUID

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, Response, status
from pydantic import BaseModel, Field

from huddle.application.usecase.comment import (
    CommentItem,
    DeleteCommentRequest,
    DeleteCommentUseCase,
    GetThreadRequest,
    GetThreadUseCase,
    SubmitCommentRequest,
    SubmitCommentResponse,
    SubmitCommentUseCase,
    SubmitReplyRequest,
    SubmitReplyResponse,
    SubmitReplyUseCase,
    ThreadResponse,
    ToggleCommentLikeRequest,
    ToggleCommentLikeResponse,
    ToggleCommentLikeUseCase,
    UpdateCommentRequest,
    UpdateCommentUseCase,
)
from huddle.domain.error import NotFoundError, ValidationError
from huddle.domain.value import AuthorContext

router = APIRouter(prefix="/posts", tags=["comments"], route_class=DishkaRoute)


class SubmitCommentAPIRequest(BaseModel):
    """API request for creating a comment or reply."""

    text: str = Field(min_length=1, max_length=10000)
    author: AuthorContext  # Supplied by the authenticating gateway


class UpdateCommentAPIRequest(BaseModel):
    """API request for editing a comment."""

    text: str = Field(min_length=1, max_length=10000)


class ToggleLikeAPIRequest(BaseModel):
    """API request for liking or unliking a comment."""

    is_liked: bool  # Current like state as seen by the member


@router.get("/{post_id}/comments", response_model=ThreadResponse)
async def get_thread(
    post_id: UUID,
    get_thread_use_case: FromDishka[GetThreadUseCase],
) -> ThreadResponse:
    """Get the reply tree of a post.

    An empty thread is an empty tree with ``total_count`` 0.
    """
    return await get_thread_use_case.execute(GetThreadRequest(post_id=str(post_id)))


@router.post(
    "/{post_id}/comments",
    response_model=SubmitCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def submit_comment(
    post_id: UUID,
    request: SubmitCommentAPIRequest,
    submit_comment_use_case: FromDishka[SubmitCommentUseCase],
) -> SubmitCommentResponse:
    """Post a top-level comment.

    Mentioned members are notified; mention failures never fail the request.

    Raises:
        HTTPException: 400 on invalid text, 404 if the post does not exist
    """
    try:
        return await submit_comment_use_case.execute(
            SubmitCommentRequest(
                post_id=str(post_id), text=request.text, author=request.author
            )
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except NotFoundError as e:
        logfire.warn("Comment submission failed - not found", error=str(e))
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post(
    "/{post_id}/comments/{comment_id}/replies",
    response_model=SubmitReplyResponse,
    status_code=status.HTTP_201_CREATED,
)
async def submit_reply(
    post_id: UUID,
    comment_id: UUID,
    request: SubmitCommentAPIRequest,
    submit_reply_use_case: FromDishka[SubmitReplyUseCase],
) -> SubmitReplyResponse:
    """Reply to a comment.

    Raises:
        HTTPException: 400 on invalid text or a parent on another post,
            404 if the parent comment does not exist
    """
    try:
        return await submit_reply_use_case.execute(
            SubmitReplyRequest(
                parent_comment_id=str(comment_id),
                post_id=str(post_id),
                text=request.text,
                author=request.author,
            )
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except NotFoundError as e:
        logfire.warn("Reply submission failed - not found", error=str(e))
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.patch("/{post_id}/comments/{comment_id}", response_model=CommentItem)
async def update_comment(
    post_id: UUID,
    comment_id: UUID,
    request: UpdateCommentAPIRequest,
    update_comment_use_case: FromDishka[UpdateCommentUseCase],
) -> CommentItem:
    """Edit a comment's text. Marks the comment as edited."""
    try:
        return await update_comment_use_case.execute(
            UpdateCommentRequest(
                comment_id=str(comment_id), post_id=str(post_id), text=request.text
            )
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.delete(
    "/{post_id}/comments/{comment_id}", status_code=status.HTTP_204_NO_CONTENT
)
async def delete_comment(
    post_id: UUID,
    comment_id: UUID,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
) -> Response:
    """Hard delete a comment and revert its counters."""
    try:
        await delete_comment_use_case.execute(
            DeleteCommentRequest(comment_id=str(comment_id), post_id=str(post_id))
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{post_id}/comments/{comment_id}/like", response_model=ToggleCommentLikeResponse
)
async def toggle_like(
    post_id: UUID,
    comment_id: UUID,
    request: ToggleLikeAPIRequest,
    toggle_like_use_case: FromDishka[ToggleCommentLikeUseCase],
) -> ToggleCommentLikeResponse:
    """Like a comment, or unlike it if the member already likes it."""
    try:
        return await toggle_like_use_case.execute(
            ToggleCommentLikeRequest(
                comment_id=str(comment_id), is_liked=request.is_liked
            )
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
