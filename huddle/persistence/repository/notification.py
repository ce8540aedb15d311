"""PostgreSQL implementation of Notification repository."""

from typing import List, Optional

import logfire
from sqlalchemy import desc, select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from huddle.domain.model import Notification
from huddle.domain.repository import NotificationRepository
from huddle.domain.value import NotificationId, NotificationType, UserId
from huddle.persistence.database import get_session, store_errors
from huddle.persistence.mappers import notification_to_dict, row_to_notification
from huddle.persistence.tables import notifications_table


class PostgresNotificationRepository(NotificationRepository):
    """PostgreSQL implementation of NotificationRepository.

    Each write commits in its own session: notifications are a side channel
    and must neither join nor roll back with the comment transaction.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize repository with a session factory.

        Args:
            session_factory: Factory for per-call sessions
        """
        self.session_factory = session_factory

    async def save(self, notification: Notification) -> Notification:
        """Persist a notification."""
        stmt = notifications_table.insert().values(
            **notification_to_dict(notification)
        )
        with store_errors("notification_repository.save"):
            async with get_session(self.session_factory) as session:
                await session.execute(stmt)
        logfire.debug(
            "Notification stored",
            notification_id=str(notification.id),
            user_id=str(notification.user_id),
        )
        return notification

    async def find_by_id(self, notification_id: NotificationId) -> Optional[Notification]:
        """Find a notification by ID."""
        stmt = select(notifications_table).where(
            notifications_table.c.id == notification_id
        )
        with store_errors("notification_repository.find_by_id"):
            async with get_session(self.session_factory) as session:
                result = await session.execute(stmt)
                row = result.fetchone()
        return row_to_notification(row._asdict()) if row else None

    async def find_by_user(
        self,
        user_id: UserId,
        type: Optional[NotificationType] = None,
        limit: int = 50,
    ) -> List[Notification]:
        """Find notifications addressed to a user, newest first."""
        stmt = select(notifications_table).where(
            notifications_table.c.user_id == user_id
        )
        if type is not None:
            stmt = stmt.where(notifications_table.c.type == type.value)
        stmt = stmt.order_by(desc(notifications_table.c.created_at)).limit(limit)

        with store_errors("notification_repository.find_by_user"):
            async with get_session(self.session_factory) as session:
                result = await session.execute(stmt)
                rows = result.fetchall()
        return [row_to_notification(row._asdict()) for row in rows]

    async def mark_read(self, notification_id: NotificationId) -> Optional[Notification]:
        """Mark a notification as read."""
        stmt = (
            update(notifications_table)
            .where(notifications_table.c.id == notification_id)
            .values(read=True)
            .returning(notifications_table)
        )
        with store_errors("notification_repository.mark_read"):
            async with get_session(self.session_factory) as session:
                result = await session.execute(stmt)
                row = result.fetchone()
        return row_to_notification(row._asdict()) if row else None
