"""Domain layer DI providers."""

from dishka import Scope, provide

from huddle.config import CommentSettings, NotificationSettings
from huddle.domain.repository import (
    CommentFeed,
    CommentRepository,
    NotificationRepository,
    PostRepository,
    UserRepository,
)
from huddle.domain.service import (
    CommentService,
    CounterService,
    NotificationService,
    ThreadSyncController,
)
from huddle.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_comment_service(
        self, comment_repository: CommentRepository, settings: CommentSettings
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(comment_repository=comment_repository, settings=settings)

    @provide
    def get_counter_service(
        self,
        comment_repository: CommentRepository,
        post_repository: PostRepository,
        settings: CommentSettings,
    ) -> CounterService:
        """Provide counter maintenance service."""
        return CounterService(
            comment_repository=comment_repository,
            post_repository=post_repository,
            settings=settings,
        )

    @provide
    def get_notification_service(
        self,
        user_repository: UserRepository,
        notification_repository: NotificationRepository,
        settings: NotificationSettings,
    ) -> NotificationService:
        """Provide mention notification service."""
        return NotificationService(
            user_repository=user_repository,
            notification_repository=notification_repository,
            settings=settings,
        )

    @provide(scope=Scope.APP)
    def get_thread_sync_controller(
        self, comment_feed: CommentFeed
    ) -> ThreadSyncController:
        """Provide thread sync controller.

        APP-scoped: live subscriptions outlive the request that opened them.
        """
        return ThreadSyncController(comment_feed=comment_feed)
