"""PostgreSQL live comment feed.

A trigger on ``comments`` (see migrations) sends ``pg_notify`` on the
configured channel with the affected post id as payload. The feed keeps one
dedicated asyncpg connection LISTENing on that channel and, for every
notification, reloads the post's full comment list and pushes it to that
post's subscribers.
"""

import asyncio
from itertools import count
from typing import Optional
from uuid import UUID

import asyncpg
import logfire
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from huddle.config import Settings
from huddle.domain.error import TransientStoreError
from huddle.domain.model import Comment
from huddle.domain.repository import (
    ChangeCallback,
    CommentFeed,
    ErrorCallback,
    Unsubscribe,
)
from huddle.domain.value import PostId
from huddle.persistence.database import get_session
from huddle.persistence.repository.comment import PostgresCommentRepository


def asyncpg_dsn(database_url: str) -> str:
    """Turn a SQLAlchemy URL into a plain libpq DSN for asyncpg."""
    url = make_url(database_url).set(drivername="postgresql")
    return url.render_as_string(hide_password=False)


class PostgresCommentFeed(CommentFeed):
    """CommentFeed backed by PostgreSQL LISTEN/NOTIFY."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        settings: Settings,
    ) -> None:
        """Initialize the feed.

        Args:
            session_factory: Factory for the sessions used to reload comments
            settings: Application settings (database URL and channel)
        """
        self.session_factory = session_factory
        self.dsn = asyncpg_dsn(settings.database_url)
        self.channel = settings.database.comment_channel
        self._connection: Optional[asyncpg.Connection] = None
        self._connect_lock = asyncio.Lock()
        self._listeners: dict[PostId, dict[int, tuple[ChangeCallback, ErrorCallback]]] = {}
        self._listener_ids = count()
        # Serializes reloads per post so snapshots are delivered in order
        self._post_locks: dict[PostId, asyncio.Lock] = {}
        self._tasks: set[asyncio.Task] = set()

    async def subscribe(
        self,
        post_id: PostId,
        on_change: ChangeCallback,
        on_error: ErrorCallback,
    ) -> Unsubscribe:
        """Listen for changes to a post and push its current comments.

        Raises:
            TransientStoreError: If the listener connection cannot be opened
        """
        with logfire.span("comment_feed.subscribe", post_id=str(post_id)):
            await self._ensure_connection()

            listener_id = next(self._listener_ids)
            self._listeners.setdefault(post_id, {})[listener_id] = (on_change, on_error)

            def unsubscribe() -> None:
                listeners = self._listeners.get(post_id)
                if listeners is not None:
                    listeners.pop(listener_id, None)
                    if not listeners:
                        del self._listeners[post_id]
                        self._post_locks.pop(post_id, None)

            await self._reload(post_id, only=listener_id)
            return unsubscribe

    async def close(self) -> None:
        """Stop listening and close the dedicated connection."""
        for task in list(self._tasks):
            task.cancel()
        connection, self._connection = self._connection, None
        if connection is not None and not connection.is_closed():
            await connection.remove_listener(self.channel, self._on_notify)
            await connection.close()
        logfire.info("Comment feed closed", channel=self.channel)

    async def _ensure_connection(self) -> None:
        async with self._connect_lock:
            if self._connection is not None and not self._connection.is_closed():
                return
            try:
                connection = await asyncpg.connect(self.dsn)
                await connection.add_listener(self.channel, self._on_notify)
            except (OSError, asyncpg.PostgresError) as e:
                raise TransientStoreError(f"Comment feed unavailable: {e}") from e
            connection.add_termination_listener(self._on_terminated)
            self._connection = connection
            logfire.info("Comment feed listening", channel=self.channel)

    def _on_notify(
        self, connection: asyncpg.Connection, pid: int, channel: str, payload: str
    ) -> None:
        try:
            post_id = PostId(UUID(payload))
        except ValueError:
            logfire.warn("Ignoring malformed comment notification", payload=payload)
            return
        if post_id not in self._listeners:
            return
        task = asyncio.create_task(self._reload(post_id))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def _on_terminated(self, connection: asyncpg.Connection) -> None:
        if connection is not self._connection:
            return
        self._connection = None
        logfire.error("Comment feed connection lost", channel=self.channel)
        error = TransientStoreError("Comment feed connection lost")
        for post_id in list(self._listeners):
            self._fail(post_id, error)

    async def _reload(self, post_id: PostId, only: Optional[int] = None) -> None:
        lock = self._post_locks.setdefault(post_id, asyncio.Lock())
        async with lock:
            try:
                comments = await self._load(post_id)
            except Exception as e:
                logfire.error(
                    "Comment feed reload failed", post_id=str(post_id), error=str(e)
                )
                self._fail(post_id, e, only=only)
                return
            self._dispatch(post_id, comments, only=only)

    async def _load(self, post_id: PostId) -> list[Comment]:
        async with get_session(self.session_factory) as session:
            return await PostgresCommentRepository(session).find_by_post(post_id)

    def _dispatch(
        self, post_id: PostId, comments: list[Comment], only: Optional[int] = None
    ) -> None:
        for listener_id, (on_change, on_error) in self._targets(post_id, only):
            try:
                on_change(list(comments))
            except Exception as e:
                logfire.error(
                    "Comment listener failed",
                    post_id=str(post_id),
                    listener_id=listener_id,
                    error=str(e),
                )
                on_error(e)

    def _fail(self, post_id: PostId, error: Exception, only: Optional[int] = None) -> None:
        for _, (_, on_error) in self._targets(post_id, only):
            on_error(error)

    def _targets(self, post_id: PostId, only: Optional[int]):
        listeners = self._listeners.get(post_id, {})
        if only is not None:
            return [(only, listeners[only])] if only in listeners else []
        return list(listeners.items())
