"""Comment use cases."""

from .delete_comment import DeleteCommentRequest, DeleteCommentUseCase
from .get_thread import GetThreadRequest, GetThreadUseCase
from .items import (
    CommentItem,
    CommentNodeItem,
    ThreadResponse,
    comment_item,
    thread_response,
)
from .submit_comment import (
    SubmitCommentRequest,
    SubmitCommentResponse,
    SubmitCommentUseCase,
)
from .submit_reply import SubmitReplyRequest, SubmitReplyResponse, SubmitReplyUseCase
from .subscribe_thread import SubscribeToThreadRequest, SubscribeToThreadUseCase
from .toggle_like import (
    ToggleCommentLikeRequest,
    ToggleCommentLikeResponse,
    ToggleCommentLikeUseCase,
)
from .update_comment import UpdateCommentRequest, UpdateCommentUseCase

__all__ = [
    "CommentItem",
    "CommentNodeItem",
    "DeleteCommentRequest",
    "DeleteCommentUseCase",
    "GetThreadRequest",
    "GetThreadUseCase",
    "SubmitCommentRequest",
    "SubmitCommentResponse",
    "SubmitCommentUseCase",
    "SubmitReplyRequest",
    "SubmitReplyResponse",
    "SubmitReplyUseCase",
    "SubscribeToThreadRequest",
    "SubscribeToThreadUseCase",
    "ThreadResponse",
    "ToggleCommentLikeRequest",
    "ToggleCommentLikeResponse",
    "ToggleCommentLikeUseCase",
    "UpdateCommentRequest",
    "UpdateCommentUseCase",
    "comment_item",
    "thread_response",
]
