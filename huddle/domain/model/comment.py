"""Comment entity.

Comments are stored as a flat, append-only collection per post. Threading is
expressed only through ``parent_comment_id``; the hierarchy is rebuilt on
read (see ``huddle.domain.service.comment_tree``).
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from pydantic import Field

from huddle.domain.model.common import DomainModel
from huddle.domain.value import CommentId, CompanyId, PostId, UserId


class Comment(DomainModel):
    """Comment entity.

    Represents a top-level comment on a post (``parent_comment_id`` is None)
    or a reply to another comment of the same post.

    Counters:
    - likes: number of likes
    - reply_count: number of *direct* replies, maintained atomically
    """

    id: CommentId
    post_id: PostId
    company_id: CompanyId
    parent_comment_id: Optional[CommentId] = None
    author_id: UserId
    author_name: str = Field(min_length=1, max_length=255)
    author_role: Optional[str] = None
    is_anonymous: bool = False
    text: str = Field(min_length=1, max_length=10000)
    edited: bool = False
    edited_at: Optional[datetime] = None
    likes: int = Field(default=0, ge=0)
    reply_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: Optional[datetime] = None

    @property
    def is_reply(self) -> bool:
        """Whether this comment replies to another comment."""
        return self.parent_comment_id is not None


@dataclass
class CommentNode:
    """Comment together with its nested replies."""

    comment: Comment
    replies: list["CommentNode"] = field(default_factory=list)

    @property
    def id(self) -> CommentId:
        return self.comment.id
