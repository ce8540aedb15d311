"""Mention notification domain service."""

import asyncio
from datetime import datetime
from uuid import uuid4

import logfire

from huddle.config import NotificationSettings
from huddle.domain.error import NotFoundError
from huddle.domain.model import Notification, Post, User
from huddle.domain.repository import NotificationRepository, UserRepository
from huddle.domain.value import (
    CompanyId,
    MentionContext,
    MentionDispatchResult,
    NotificationId,
    NotificationType,
    UserId,
    UserStatus,
)
from huddle.util.retry import retry_async

from .base import Service
from .mention_parser import extract_mentioned_usernames


class NotificationService(Service):
    """Domain service dispatching and reading mention notifications.

    Mentions are a best-effort side channel: nothing in here may fail or
    block the comment write that triggered it.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        notification_repository: NotificationRepository,
        settings: NotificationSettings,
    ) -> None:
        """Initialize notification service.

        Args:
            user_repository: User repository used to resolve usernames
            notification_repository: Notification repository
            settings: Retry and search settings
        """
        self.user_repository = user_repository
        self.notification_repository = notification_repository
        self.settings = settings

    async def create_mention_notifications(
        self,
        text: str,
        company_id: CompanyId,
        context: MentionContext,
    ) -> MentionDispatchResult:
        """Notify every member mentioned in ``text``.

        Steps:
        1. Extract distinct usernames from the text
        2. Resolve each username within the tenant (unknown names are skipped)
        3. Skip the author
        4. Persist one notification per remaining recipient

        Recipients are processed concurrently. A failing recipient is logged
        and left out of the count without affecting the others.

        Args:
            text: Comment or post body
            company_id: Tenant scope for username resolution
            context: Where the mention was made and by whom

        Returns:
            success flag and number of notifications written. Never raises.
        """
        with logfire.span(
            "notification_service.create_mention_notifications",
            post_id=str(context.post_id),
            comment_id=str(context.comment_id) if context.comment_id else None,
            author_id=str(context.author_id),
        ):
            try:
                usernames = extract_mentioned_usernames(text)
                if not usernames:
                    return MentionDispatchResult(success=True, count=0)

                results = await asyncio.gather(
                    *(
                        self._notify_username(username, company_id, context)
                        for username in usernames
                    )
                )
                count = sum(1 for delivered in results if delivered)
                logfire.info(
                    "Mention notifications created",
                    post_id=str(context.post_id),
                    mentioned=len(usernames),
                    count=count,
                )
                return MentionDispatchResult(success=True, count=count)
            except Exception as e:
                logfire.error(
                    "Error creating mention notifications",
                    post_id=str(context.post_id),
                    error=str(e),
                )
                return MentionDispatchResult(success=False, count=0)

    async def _notify_username(
        self, username: str, company_id: CompanyId, context: MentionContext
    ) -> bool:
        """Resolve one username and write its notification.

        Returns:
            True if a notification was written
        """
        try:
            user = await self.user_repository.find_by_username(username, company_id)
        except Exception as e:
            logfire.warn(
                "Mention lookup failed", username=username, error=str(e)
            )
            return False

        if user is None:
            logfire.info("Mentioned username not found", username=username)
            return False
        if user.id == context.author_id:
            # Never notify the author about their own mention
            return False

        notification = self._build_notification(user, company_id, context)
        try:
            await retry_async(
                lambda: self.notification_repository.save(notification),
                name="notification_repository.save",
                attempts=self.settings.retry_attempts,
                base_delay=self.settings.retry_base_delay,
                max_delay=self.settings.retry_max_delay,
            )
        except Exception as e:
            logfire.warn(
                "Mention notification write failed",
                username=username,
                user_id=str(user.id),
                error=str(e),
            )
            return False
        return True

    @staticmethod
    def _build_notification(
        user: User, company_id: CompanyId, context: MentionContext
    ) -> Notification:
        if context.comment_id:
            message = f'Mentioned you in a comment on "{context.post_title}"'
        else:
            message = f'Mentioned you in "{context.post_title}"'

        return Notification(
            id=NotificationId(uuid4()),
            user_id=user.id,
            company_id=company_id,
            type=NotificationType.MENTION,
            title=f"{context.author_name} mentioned you",
            message=message,
            post_id=context.post_id,
            comment_id=context.comment_id,
            mentioned_by=context.author_name,
            mentioned_by_id=context.author_id,
            read=False,
            created_at=datetime.now(),
        )

    async def notify_post_author(self, post: Post, context: MentionContext) -> bool:
        """Tell the post author that someone commented on their post.

        Skipped when the commenter is the post author.

        Args:
            post: Post that received the comment
            context: Who commented

        Returns:
            True if a notification was written. Never raises.
        """
        if post.author_id == context.author_id:
            return False

        with logfire.span(
            "notification_service.notify_post_author",
            post_id=str(post.id),
            user_id=str(post.author_id),
        ):
            notification = Notification(
                id=NotificationId(uuid4()),
                user_id=post.author_id,
                company_id=post.company_id,
                type=NotificationType.COMMENT,
                title="New Comment",
                message=f'{context.author_name} commented on your post "{post.title}"',
                post_id=post.id,
                mentioned_by=context.author_name,
                mentioned_by_id=context.author_id,
                read=False,
                created_at=datetime.now(),
            )
            try:
                await retry_async(
                    lambda: self.notification_repository.save(notification),
                    name="notification_repository.save",
                    attempts=self.settings.retry_attempts,
                    base_delay=self.settings.retry_base_delay,
                    max_delay=self.settings.retry_max_delay,
                )
            except Exception as e:
                logfire.warn(
                    "Post author notification failed",
                    post_id=str(post.id),
                    error=str(e),
                )
                return False
            return True

    async def get_user_mentions(
        self, user_id: UserId, limit: int = 50
    ) -> list[Notification]:
        """Get the mention notifications addressed to a user, newest first.

        Args:
            user_id: Recipient
            limit: Maximum number of notifications

        Returns:
            Mention notifications, empty on failure
        """
        with logfire.span(
            "notification_service.get_user_mentions", user_id=str(user_id)
        ):
            try:
                mentions = await self.notification_repository.find_by_user(
                    user_id, type=NotificationType.MENTION, limit=limit
                )
            except Exception as e:
                logfire.error(
                    "Error fetching user mentions", user_id=str(user_id), error=str(e)
                )
                return []
            logfire.info(
                "User mentions retrieved", user_id=str(user_id), count=len(mentions)
            )
            return mentions

    async def mark_as_read(self, notification_id: NotificationId) -> Notification:
        """Mark a notification as read.

        Raises:
            NotFoundError: If the notification does not exist
        """
        with logfire.span(
            "notification_service.mark_as_read",
            notification_id=str(notification_id),
        ):
            updated = await self.notification_repository.mark_read(notification_id)
            if updated is None:
                logfire.warn(
                    "Notification not found", notification_id=str(notification_id)
                )
                raise NotFoundError("Notification", str(notification_id))
            return updated

    async def search_users_for_mention(
        self, search_term: str, company_id: CompanyId, limit: int = 10
    ) -> list[User]:
        """Find active tenant members matching a partial username.

        Matches the username or display name case-insensitively.

        Args:
            search_term: Text typed after ``@``
            company_id: Tenant scope
            limit: Maximum number of candidates

        Returns:
            Matching users, empty on failure
        """
        with logfire.span(
            "notification_service.search_users_for_mention",
            company_id=str(company_id),
            search_term=search_term,
        ):
            try:
                users = await self.user_repository.search(
                    company_id, limit=self.settings.search_scan_limit
                )
            except Exception as e:
                logfire.error(
                    "Error searching users for mention",
                    company_id=str(company_id),
                    error=str(e),
                )
                return []

            term = search_term.lower()
            matches = [
                user
                for user in users
                if user.status == UserStatus.ACTIVE
                and (
                    term in user.username.root.lower()
                    or term in (user.display_name or "").lower()
                )
            ]
            return matches[:limit]
