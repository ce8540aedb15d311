"""In-memory post repository for testing."""

from datetime import datetime
from typing import Optional

from huddle.domain.model.post import Post
from huddle.domain.repository.post import PostRepository
from huddle.domain.value import PostId


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing."""

    def __init__(self) -> None:
        self._posts: dict[PostId, Post] = {}

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        return self._posts.get(post_id)

    async def save(self, post: Post) -> Post:
        """Save or update a post."""
        self._posts[post.id] = post
        return post

    async def increment_comment_count(self, post_id: PostId, delta: int) -> None:
        """Add delta to comment_count (minimum 0)."""
        post = self._posts.get(post_id)
        if post:
            # Posts are immutable, store an updated copy
            self._posts[post_id] = post.model_copy(
                update={
                    "comment_count": max(0, post.comment_count + delta),
                    "updated_at": datetime.now(),
                }
            )
