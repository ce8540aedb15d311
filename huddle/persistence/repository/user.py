"""PostgreSQL implementation of User repository."""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from huddle.domain.model import User
from huddle.domain.repository import UserRepository
from huddle.domain.value import CompanyId, UserId, UserStatus
from huddle.persistence.database import get_session, store_errors
from huddle.persistence.mappers import row_to_user, user_to_dict
from huddle.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository.

    Mention resolution looks up several usernames concurrently, so every
    call runs in its own short session instead of the request session.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize repository with a session factory.

        Args:
            session_factory: Factory for per-call sessions
        """
        self.session_factory = session_factory

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        stmt = select(users_table).where(users_table.c.id == user_id)
        with store_errors("user_repository.find_by_id"):
            async with get_session(self.session_factory) as session:
                result = await session.execute(stmt)
                row = result.fetchone()
        return row_to_user(row._asdict()) if row else None

    async def find_by_username(
        self, username: str, company_id: CompanyId
    ) -> Optional[User]:
        """Resolve a username within a tenant (exact match)."""
        stmt = (
            select(users_table)
            .where(users_table.c.company_id == company_id)
            .where(users_table.c.username == username)
        )
        with store_errors("user_repository.find_by_username"):
            async with get_session(self.session_factory) as session:
                result = await session.execute(stmt)
                row = result.fetchone()
        return row_to_user(row._asdict()) if row else None

    async def search(self, company_id: CompanyId, limit: int = 50) -> List[User]:
        """List active users of a tenant ordered by username."""
        stmt = (
            select(users_table)
            .where(users_table.c.company_id == company_id)
            .where(users_table.c.status == UserStatus.ACTIVE.value)
            .order_by(users_table.c.username)
            .limit(limit)
        )
        with store_errors("user_repository.search"):
            async with get_session(self.session_factory) as session:
                result = await session.execute(stmt)
                rows = result.fetchall()
        return [row_to_user(row._asdict()) for row in rows]

    async def save(self, user: User) -> User:
        """Save a user (create or update)."""
        user_dict = user_to_dict(user)
        stmt = insert(users_table).values(**user_dict)
        stmt = stmt.on_conflict_do_update(
            index_elements=[users_table.c.id],
            set_={k: v for k, v in user_dict.items() if k != "id"},
        ).returning(users_table)
        with store_errors("user_repository.save"):
            async with get_session(self.session_factory) as session:
                result = await session.execute(stmt)
                row = result.fetchone()
        return row_to_user(row._asdict()) if row else user
