"""Subscribe to thread use case."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from huddle.application.usecase.base import BaseUseCase
from huddle.domain.service import ThreadSubscription, ThreadSyncController
from huddle.domain.service.thread_sync import ThreadErrorCallback, UpdateCallback
from huddle.domain.value import PostId


class SubscribeToThreadRequest(BaseModel):
    """Subscribe to thread request."""

    post_id: str  # UUID string


class SubscribeToThreadUseCase(BaseUseCase):
    """Use case for following a post's comment thread live."""

    def __init__(self, thread_sync_controller: ThreadSyncController) -> None:
        self.thread_sync_controller = thread_sync_controller

    async def execute(
        self,
        request: SubscribeToThreadRequest,
        on_update: Optional[UpdateCallback] = None,
        on_error: Optional[ThreadErrorCallback] = None,
    ) -> ThreadSubscription:
        """Open a live subscription.

        The caller owns the returned subscription and must call
        ``unsubscribe()`` when it is done with it.
        """
        return await self.thread_sync_controller.subscribe(
            PostId(UUID(request.post_id)), on_update=on_update, on_error=on_error
        )
