"""Post repository interface (post counter store)."""

from abc import ABC, abstractmethod
from typing import Optional

from huddle.domain.model.post import Post
from huddle.domain.value import PostId


class PostRepository(ABC):
    """Repository for Post entity."""

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        pass

    @abstractmethod
    async def save(self, post: Post) -> Post:
        """Save a post (create or update)."""
        pass

    @abstractmethod
    async def increment_comment_count(self, post_id: PostId, delta: int) -> None:
        """Atomically add ``delta`` to the post's comment count (floor 0).

        Args:
            post_id: Post ID
            delta: Amount to add (negative to decrement)
        """
        pass
