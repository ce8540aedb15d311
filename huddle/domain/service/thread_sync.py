"""Real-time comment thread synchronisation.

A subscription listens to the live comment feed of one post and, on every
push, rebuilds the whole reply tree from the complete flat list it was
given. Rebuilding from full snapshots (instead of applying deltas) means a
subscriber never sees a tree that did not exist in the store at some
instant.

Lifecycle::

    IDLE -> SUBSCRIBED -> (UPDATING -> SUBSCRIBED)* -> UNSUBSCRIBED
"""

import asyncio
from enum import Enum
from typing import AsyncIterator, Callable, Optional

import logfire

from huddle.domain.error import ThreadLoadError
from huddle.domain.model import Comment, ThreadSnapshot
from huddle.domain.repository import CommentFeed, Unsubscribe
from huddle.domain.value import PostId

from .base import Service
from .comment_tree import build_comment_tree, count_comments

UpdateCallback = Callable[[ThreadSnapshot], None]
ThreadErrorCallback = Callable[[ThreadLoadError], None]

class SubscriptionState(str, Enum):
    """State of a thread subscription."""

    IDLE = "idle"
    SUBSCRIBED = "subscribed"
    UPDATING = "updating"
    UNSUBSCRIBED = "unsubscribed"


class ThreadSubscription:
    """Live view of one post's comment thread.

    Snapshots are delivered to ``on_update`` (if given) and buffered for
    :meth:`snapshots`. Only the newest unread snapshot is buffered; every
    snapshot is a full tree, so older unread ones are superseded. Nothing is
    delivered once :meth:`unsubscribe` has been called.
    """

    def __init__(
        self,
        post_id: PostId,
        on_update: Optional[UpdateCallback] = None,
        on_error: Optional[ThreadErrorCallback] = None,
    ) -> None:
        self.post_id = post_id
        self.state = SubscriptionState.IDLE
        self._on_update = on_update
        self._on_error = on_error
        self._release: Optional[Unsubscribe] = None
        self._pending: Optional[ThreadSnapshot] = None
        self._failure: Optional[ThreadLoadError] = None
        self._changed = asyncio.Event()

    @property
    def active(self) -> bool:
        return self.state in (SubscriptionState.SUBSCRIBED, SubscriptionState.UPDATING)

    async def start(self, feed: CommentFeed) -> None:
        """Open the live query on ``feed``.

        A failure to subscribe is reported through the error path and leaves
        the subscription closed.
        """
        if self.state != SubscriptionState.IDLE:
            return

        # Pushes may arrive while feed.subscribe is still running
        self.state = SubscriptionState.SUBSCRIBED
        try:
            release = await feed.subscribe(
                self.post_id, self._handle_change, self._handle_error
            )
        except Exception as e:
            self._handle_error(e)
            return

        if self.state == SubscriptionState.UNSUBSCRIBED:
            # Unsubscribed while the feed was still connecting
            release()
            return
        self._release = release
        logfire.info("Thread subscription opened", post_id=str(self.post_id))

    def unsubscribe(self) -> None:
        """Release the live query. Safe to call more than once."""
        if self.state == SubscriptionState.UNSUBSCRIBED:
            return
        release, self._release = self._release, None
        self._close()
        if release is not None:
            release()
        logfire.info("Thread subscription closed", post_id=str(self.post_id))

    async def snapshots(self) -> AsyncIterator[ThreadSnapshot]:
        """Iterate over snapshots as they arrive.

        A consumer slower than the feed skips straight to the newest tree.
        Ends after :meth:`unsubscribe`, once the buffered snapshot is read.

        Raises:
            ThreadLoadError: If the live query fails
        """
        while True:
            if self._pending is not None:
                snapshot, self._pending = self._pending, None
                yield snapshot
                continue
            if self._failure is not None:
                raise self._failure
            if self.state == SubscriptionState.UNSUBSCRIBED:
                return
            self._changed.clear()
            await self._changed.wait()

    def _handle_change(self, comments: list[Comment]) -> None:
        if not self.active:
            logfire.debug(
                "Dropping push for closed thread subscription",
                post_id=str(self.post_id),
            )
            return

        self.state = SubscriptionState.UPDATING
        tree = build_comment_tree(comments)
        snapshot = ThreadSnapshot(
            post_id=self.post_id, tree=tree, total_count=count_comments(tree)
        )
        self.state = SubscriptionState.SUBSCRIBED
        self._pending = snapshot
        self._changed.set()
        if self._on_update is not None:
            try:
                self._on_update(snapshot)
            except Exception as e:
                logfire.error(
                    "Thread update callback failed",
                    post_id=str(self.post_id),
                    error=str(e),
                )

    def _handle_error(self, error: Exception) -> None:
        if not self.active:
            return

        logfire.error(
            "Thread subscription failed", post_id=str(self.post_id), error=str(error)
        )
        load_error = ThreadLoadError(str(self.post_id), error)
        self._failure = load_error
        # The live query is dead after an error; no automatic retry
        self.unsubscribe()
        if self._on_error is not None:
            self._on_error(load_error)

    def _close(self) -> None:
        self.state = SubscriptionState.UNSUBSCRIBED
        self._changed.set()


class ThreadSyncController(Service):
    """Opens live thread subscriptions on top of the comment feed."""

    def __init__(self, comment_feed: CommentFeed) -> None:
        """Initialize thread sync controller.

        Args:
            comment_feed: Live comment query of the store
        """
        self.comment_feed = comment_feed

    async def subscribe(
        self,
        post_id: PostId,
        on_update: Optional[UpdateCallback] = None,
        on_error: Optional[ThreadErrorCallback] = None,
    ) -> ThreadSubscription:
        """Subscribe to a post's comment thread.

        The current thread is delivered right away, then again after every
        change. Errors are reported once through ``on_error`` and are not
        retried; the caller decides whether to subscribe again.

        Args:
            post_id: Post ID
            on_update: Receives each rebuilt snapshot
            on_error: Receives subscription failures

        Returns:
            Active subscription (closed already if the feed refused it)
        """
        with logfire.span("thread_sync.subscribe", post_id=str(post_id)):
            subscription = ThreadSubscription(post_id, on_update, on_error)
            await subscription.start(self.comment_feed)
            return subscription
