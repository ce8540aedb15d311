"""PostgreSQL implementation of Post repository."""

from datetime import datetime
from typing import Optional

import logfire
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from huddle.domain.model import Post
from huddle.domain.repository import PostRepository
from huddle.domain.value import PostId
from huddle.persistence.database import floored_increment, store_errors
from huddle.persistence.mappers import post_to_dict, row_to_post
from huddle.persistence.tables import posts_table


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        stmt = select(posts_table).where(posts_table.c.id == post_id)
        with store_errors("post_repository.find_by_id"):
            result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_post(row._asdict()) if row else None

    async def save(self, post: Post) -> Post:
        """Save a post (create or update)."""
        with logfire.span("post_repository.save", post_id=str(post.id)):
            post_dict = post_to_dict(post)
            with store_errors("post_repository.save"):
                existing = await self.find_by_id(post.id)
                if existing:
                    stmt = (
                        posts_table.update()
                        .where(posts_table.c.id == post.id)
                        .values(**post_dict)
                    )
                else:
                    stmt = posts_table.insert().values(**post_dict)
                await self.session.execute(stmt)
                await self.session.flush()
            return await self.find_by_id(post.id) or post

    async def increment_comment_count(self, post_id: PostId, delta: int) -> None:
        """Atomically add delta to comment_count (minimum 0)."""
        stmt = (
            posts_table.update()
            .where(posts_table.c.id == post_id)
            .values(
                comment_count=floored_increment(posts_table.c.comment_count, delta),
                updated_at=datetime.now(),
            )
        )
        with store_errors("post_repository.increment_comment_count"):
            result = await self.session.execute(stmt)
            await self.session.flush()
        if result.rowcount == 0:
            logfire.warn("Comment count update matched no post", post_id=str(post_id))
