"""PostgreSQL implementation of Comment repository."""

from datetime import datetime
from typing import List, Optional

import logfire
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from huddle.domain.model import Comment
from huddle.domain.repository import CommentRepository
from huddle.domain.value import CommentId, PostId
from huddle.persistence.database import floored_increment, store_errors
from huddle.persistence.mappers import comment_to_dict, row_to_comment
from huddle.persistence.tables import comments_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        with store_errors("comment_repository.find_by_id"):
            result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_by_post(self, post_id: PostId) -> List[Comment]:
        """Find all comments for a post, oldest first."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.post_id == post_id)
            .order_by(comments_table.c.created_at, comments_table.c.id)
        )
        with store_errors("comment_repository.find_by_post"):
            result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update)."""
        comment_dict = comment_to_dict(comment)
        with store_errors("comment_repository.save"):
            existing = await self.find_by_id(comment.id)
            if existing:
                stmt = (
                    comments_table.update()
                    .where(comments_table.c.id == comment.id)
                    .values(**comment_dict)
                    .returning(comments_table)
                )
            else:
                stmt = comments_table.insert().values(**comment_dict).returning(
                    comments_table
                )
            result = await self.session.execute(stmt)
            await self.session.flush()

        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else comment

    async def update_text(self, comment_id: CommentId, text: str) -> Comment | None:
        """Replace the text of a comment and mark it as edited."""
        now = datetime.now()
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(text=text, edited=True, edited_at=now, updated_at=now)
            .returning(comments_table)
        )
        with store_errors("comment_repository.update_text"):
            result = await self.session.execute(stmt)
            row = result.fetchone()
            if row is None:
                # Comment not found (deleted concurrently)
                return None
            await self.session.flush()
        return row_to_comment(row._asdict())

    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment (hard delete)."""
        stmt = comments_table.delete().where(comments_table.c.id == comment_id)
        with store_errors("comment_repository.delete"):
            await self.session.execute(stmt)
            await self.session.flush()

    async def increment_reply_count(self, comment_id: CommentId, delta: int) -> None:
        """Atomically add delta to reply_count (minimum 0)."""
        stmt = (
            comments_table.update()
            .where(comments_table.c.id == comment_id)
            .values(
                reply_count=floored_increment(comments_table.c.reply_count, delta),
                updated_at=datetime.now(),
            )
        )
        with store_errors("comment_repository.increment_reply_count"):
            result = await self.session.execute(stmt)
            await self.session.flush()
        if result.rowcount == 0:
            logfire.warn(
                "Reply count update matched no comment", comment_id=str(comment_id)
            )

    async def increment_likes(self, comment_id: CommentId, delta: int) -> int | None:
        """Atomically add delta to likes (minimum 0) and return the new value."""
        stmt = (
            comments_table.update()
            .where(comments_table.c.id == comment_id)
            .values(
                likes=floored_increment(comments_table.c.likes, delta),
                updated_at=datetime.now(),
            )
            .returning(comments_table.c.likes)
        )
        with store_errors("comment_repository.increment_likes"):
            result = await self.session.execute(stmt)
            likes = result.scalar_one_or_none()
            await self.session.flush()
        return likes
