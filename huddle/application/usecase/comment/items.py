"""Response items shared by the comment use cases."""

from datetime import datetime

from pydantic import BaseModel

from huddle.domain.model import Comment, CommentNode, ThreadSnapshot


class CommentItem(BaseModel):
    """Comment item in response."""

    comment_id: str
    post_id: str
    parent_comment_id: str | None
    author_id: str
    author_name: str
    author_role: str | None
    is_anonymous: bool
    text: str
    edited: bool
    edited_at: datetime | None
    likes: int
    reply_count: int
    created_at: datetime


class CommentNodeItem(CommentItem):
    """Comment item with its nested replies."""

    replies: list["CommentNodeItem"] = []


class ThreadResponse(BaseModel):
    """Reply tree of a post and its total comment count."""

    post_id: str
    tree: list[CommentNodeItem]
    total_count: int


def comment_item(comment: Comment) -> CommentItem:
    """Convert a comment to its response item."""
    return CommentItem(**_comment_fields(comment))


def thread_response(snapshot: ThreadSnapshot) -> ThreadResponse:
    """Convert a thread snapshot to its response.

    Nodes are converted children-first with an explicit stack, so deep reply
    chains do not hit the recursion limit.
    """
    converted: dict[int, CommentNodeItem] = {}
    stack: list[tuple[CommentNode, bool]] = [(node, False) for node in snapshot.tree]
    while stack:
        node, children_done = stack.pop()
        if children_done:
            converted[id(node)] = CommentNodeItem(
                **_comment_fields(node.comment),
                replies=[converted.pop(id(child)) for child in node.replies],
            )
        else:
            stack.append((node, True))
            stack.extend((child, False) for child in node.replies)

    return ThreadResponse(
        post_id=str(snapshot.post_id),
        tree=[converted.pop(id(node)) for node in snapshot.tree],
        total_count=snapshot.total_count,
    )


def _comment_fields(comment: Comment) -> dict:
    return {
        "comment_id": str(comment.id),
        "post_id": str(comment.post_id),
        "parent_comment_id": (
            str(comment.parent_comment_id) if comment.parent_comment_id else None
        ),
        "author_id": str(comment.author_id),
        "author_name": comment.author_name,
        "author_role": comment.author_role,
        "is_anonymous": comment.is_anonymous,
        "text": comment.text,
        "edited": comment.edited,
        "edited_at": comment.edited_at,
        "likes": comment.likes,
        "reply_count": comment.reply_count,
        "created_at": comment.created_at,
    }
