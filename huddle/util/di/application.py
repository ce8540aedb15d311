"""Application layer DI providers."""

from dishka import Scope, provide

from huddle.application.usecase.comment import (
    DeleteCommentUseCase,
    GetThreadUseCase,
    SubmitCommentUseCase,
    SubmitReplyUseCase,
    SubscribeToThreadUseCase,
    ToggleCommentLikeUseCase,
    UpdateCommentUseCase,
)
from huddle.application.usecase.notification import (
    GetMentionsUseCase,
    MarkNotificationReadUseCase,
    SearchMentionCandidatesUseCase,
)
from huddle.domain.repository import PostRepository
from huddle.domain.service import (
    CommentService,
    CounterService,
    NotificationService,
    ThreadSyncController,
)
from huddle.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_submit_comment_use_case(
        self,
        comment_service: CommentService,
        counter_service: CounterService,
        notification_service: NotificationService,
        post_repository: PostRepository,
    ) -> SubmitCommentUseCase:
        """Provide submit comment use case."""
        return SubmitCommentUseCase(
            comment_service=comment_service,
            counter_service=counter_service,
            notification_service=notification_service,
            post_repository=post_repository,
        )

    @provide(scope=Scope.REQUEST)
    def get_submit_reply_use_case(
        self,
        comment_service: CommentService,
        counter_service: CounterService,
        notification_service: NotificationService,
        post_repository: PostRepository,
    ) -> SubmitReplyUseCase:
        """Provide submit reply use case."""
        return SubmitReplyUseCase(
            comment_service=comment_service,
            counter_service=counter_service,
            notification_service=notification_service,
            post_repository=post_repository,
        )

    @provide(scope=Scope.REQUEST)
    def get_get_thread_use_case(
        self, comment_service: CommentService
    ) -> GetThreadUseCase:
        """Provide get thread use case."""
        return GetThreadUseCase(comment_service=comment_service)

    @provide(scope=Scope.APP)
    def get_subscribe_to_thread_use_case(
        self, thread_sync_controller: ThreadSyncController
    ) -> SubscribeToThreadUseCase:
        """Provide subscribe to thread use case."""
        return SubscribeToThreadUseCase(thread_sync_controller=thread_sync_controller)

    @provide(scope=Scope.REQUEST)
    def get_update_comment_use_case(
        self, comment_service: CommentService
    ) -> UpdateCommentUseCase:
        """Provide update comment use case."""
        return UpdateCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self, comment_service: CommentService, counter_service: CounterService
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(
            comment_service=comment_service, counter_service=counter_service
        )

    @provide(scope=Scope.REQUEST)
    def get_toggle_comment_like_use_case(
        self, comment_service: CommentService
    ) -> ToggleCommentLikeUseCase:
        """Provide toggle comment like use case."""
        return ToggleCommentLikeUseCase(comment_service=comment_service)

    # Notification use cases
    @provide(scope=Scope.REQUEST)
    def get_get_mentions_use_case(
        self, notification_service: NotificationService
    ) -> GetMentionsUseCase:
        """Provide get mentions use case."""
        return GetMentionsUseCase(notification_service=notification_service)

    @provide(scope=Scope.REQUEST)
    def get_mark_notification_read_use_case(
        self, notification_service: NotificationService
    ) -> MarkNotificationReadUseCase:
        """Provide mark notification read use case."""
        return MarkNotificationReadUseCase(notification_service=notification_service)

    @provide(scope=Scope.REQUEST)
    def get_search_mention_candidates_use_case(
        self, notification_service: NotificationService
    ) -> SearchMentionCandidatesUseCase:
        """Provide search mention candidates use case."""
        return SearchMentionCandidatesUseCase(
            notification_service=notification_service
        )
