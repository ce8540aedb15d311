"""WebSocket stream of live comment threads.

Provides:
- WS /posts/{post_id}/comments/stream - full thread snapshot on every change
"""

import asyncio
import contextlib
from uuid import UUID

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from huddle.application.usecase.comment import (
    SubscribeToThreadRequest,
    SubscribeToThreadUseCase,
    thread_response,
)
from huddle.domain.error import ThreadLoadError
from huddle.domain.service import ThreadSubscription
from huddle.util.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/posts", tags=["comments-ws"])


async def _watch_client(websocket: WebSocket, subscription: ThreadSubscription) -> None:
    """Unsubscribe as soon as the client goes away.

    Client messages other than ``ping`` are ignored.
    """
    try:
        while True:
            message = await websocket.receive_json()
            if isinstance(message, dict) and message.get("type") == "ping":
                await websocket.send_json({"type": "pong"})
    except WebSocketDisconnect:
        pass
    except Exception as e:
        logger.warning("Comment stream receive failed: %s", e)
    finally:
        subscription.unsubscribe()


@router.websocket("/{post_id}/comments/stream")
@inject
async def comment_stream(
    websocket: WebSocket,
    post_id: UUID,
    subscribe_use_case: FromDishka[SubscribeToThreadUseCase],
) -> None:
    """Stream a post's comment thread.

    Messages sent:
    - {"type": "snapshot", "data": {post_id, tree, total_count}} - on
      connect and after every change
    - {"type": "error", "message": ...} - the thread failed to load; the
      socket is closed afterwards
    - {"type": "pong"} - reply to a client {"type": "ping"}
    """
    await websocket.accept()

    subscription = await subscribe_use_case.execute(
        SubscribeToThreadRequest(post_id=str(post_id))
    )
    watcher = asyncio.create_task(_watch_client(websocket, subscription))
    logger.info("Comment stream opened for post %s", post_id)

    try:
        async for snapshot in subscription.snapshots():
            await websocket.send_json(
                {
                    "type": "snapshot",
                    "data": thread_response(snapshot).model_dump(mode="json"),
                }
            )
    except ThreadLoadError as e:
        logger.warning("Comment stream failed for post %s: %s", post_id, e.cause)
        with contextlib.suppress(WebSocketDisconnect, RuntimeError):
            await websocket.send_json(
                {"type": "error", "message": "Failed to load comments"}
            )
            await websocket.close(code=1011)
    except WebSocketDisconnect:
        pass
    finally:
        subscription.unsubscribe()
        if not watcher.done():
            watcher.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await watcher
        logger.info("Comment stream closed for post %s", post_id)
