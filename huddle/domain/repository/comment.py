"""Comment repository and live feed interfaces."""

from abc import ABC, abstractmethod
from typing import Callable, List, Optional

from huddle.domain.model.comment import Comment
from huddle.domain.value import CommentId, PostId

# Receives the complete flat comment list of a post, oldest first
ChangeCallback = Callable[[List[Comment]], None]
ErrorCallback = Callable[[Exception], None]
Unsubscribe = Callable[[], None]


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_post(self, post_id: PostId) -> List[Comment]:
        """Find all comments for a post as a flat list.

        Comments are ordered by ``created_at`` ascending, which is the order
        the tree builder relies on for sibling ordering.

        Args:
            post_id: The post ID

        Returns:
            Flat list of comments, oldest first
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update).

        Args:
            comment: The comment to save

        Returns:
            The stored comment
        """
        pass

    @abstractmethod
    async def update_text(self, comment_id: CommentId, text: str) -> Optional[Comment]:
        """Replace a comment's text and mark it as edited.

        Args:
            comment_id: Comment ID
            text: New text

        Returns:
            Updated comment, or None if the comment does not exist
        """
        pass

    @abstractmethod
    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment (hard delete).

        Replies of the deleted comment are left untouched.

        Args:
            comment_id: The comment ID to delete
        """
        pass

    @abstractmethod
    async def increment_reply_count(self, comment_id: CommentId, delta: int) -> None:
        """Atomically add ``delta`` to a comment's reply count (floor 0).

        Args:
            comment_id: Comment ID
            delta: Amount to add (negative to decrement)
        """
        pass

    @abstractmethod
    async def increment_likes(self, comment_id: CommentId, delta: int) -> Optional[int]:
        """Atomically add ``delta`` to a comment's likes (floor 0).

        Args:
            comment_id: Comment ID
            delta: Amount to add (negative to decrement)

        Returns:
            New like count, or None if the comment does not exist
        """
        pass


class CommentFeed(ABC):
    """Live query over the comments of a post.

    Every push carries the *entire* current comment list of the post
    ordered by ``created_at`` ascending, never a delta.
    """

    @abstractmethod
    async def subscribe(
        self,
        post_id: PostId,
        on_change: ChangeCallback,
        on_error: ErrorCallback,
    ) -> Unsubscribe:
        """Start listening to a post's comments.

        The current list is pushed once immediately, then again after every
        create, update or delete affecting the post.

        Args:
            post_id: Post to watch
            on_change: Called with the full flat comment list
            on_error: Called when the live query fails

        Returns:
            Callable releasing the subscription (safe to call repeatedly)
        """
        pass
