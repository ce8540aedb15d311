"""Unit tests for SubmitCommentUseCase."""

from uuid import uuid4

import pytest

from huddle.application.usecase.comment import (
    SubmitCommentRequest,
    SubmitCommentUseCase,
)
from huddle.domain.error import NotFoundError, ValidationError
from huddle.domain.repository import (
    CommentRepository,
    NotificationRepository,
    PostRepository,
    UserRepository,
)
from huddle.domain.value import CompanyId, NotificationType
from tests.conftest import make_author, make_post, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


def _mentions(notification_repo):
    return [n for n in notification_repo.all() if n.type == NotificationType.MENTION]


class TestSubmitCommentUseCase:
    """Tests for SubmitCommentUseCase."""

    @pytest.mark.asyncio
    async def test_submit_comment_creates_comment_and_counts_it(self, unit_env):
        """Comment is stored and the post total goes up."""
        # Arrange
        use_case = await unit_env.get(SubmitCommentUseCase)
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)
        company_id = CompanyId(uuid4())
        post = await post_repo.save(make_post(company_id))

        # Act
        response = await use_case.execute(
            SubmitCommentRequest(
                post_id=str(post.id),
                text="Ship it",
                author=make_author(company_id=company_id),
            )
        )

        # Assert
        assert response.comment.text == "Ship it"
        assert response.comment.parent_comment_id is None
        assert response.mentions_notified == 0
        assert len(await comment_repo.find_by_post(post.id)) == 1
        assert (await post_repo.find_by_id(post.id)).comment_count == 1

    @pytest.mark.asyncio
    async def test_mentions_are_notified_without_comment_id(self, unit_env):
        """Top-level comment mentions point at the post only."""
        # Arrange
        use_case = await unit_env.get(SubmitCommentUseCase)
        post_repo = await unit_env.get(PostRepository)
        user_repo = await unit_env.get(UserRepository)
        notification_repo = await unit_env.get(NotificationRepository)
        company_id = CompanyId(uuid4())
        post = await post_repo.save(make_post(company_id, title="Launch plan"))
        author = await user_repo.save(make_user("alice", company_id, "Alice A"))
        bob = await user_repo.save(make_user("bob", company_id, "Bob B"))

        # Act
        response = await use_case.execute(
            SubmitCommentRequest(
                post_id=str(post.id),
                text="@alice @bob thoughts?",
                author=make_author(author),
            )
        )

        # Assert
        assert response.mentions_notified == 1
        (notification,) = _mentions(notification_repo)
        assert notification.user_id == bob.id
        assert notification.post_id == post.id
        assert notification.comment_id is None
        assert notification.message == 'Mentioned you in "Launch plan"'

    @pytest.mark.asyncio
    async def test_anonymous_author_name_used_in_notifications(self, unit_env):
        """Anonymous authors are not revealed through mentions."""
        use_case = await unit_env.get(SubmitCommentUseCase)
        post_repo = await unit_env.get(PostRepository)
        user_repo = await unit_env.get(UserRepository)
        notification_repo = await unit_env.get(NotificationRepository)
        company_id = CompanyId(uuid4())
        post = await post_repo.save(make_post(company_id))
        author = await user_repo.save(make_user("alice", company_id, "Alice A"))
        await user_repo.save(make_user("bob", company_id))

        response = await use_case.execute(
            SubmitCommentRequest(
                post_id=str(post.id),
                text="@bob psst",
                author=make_author(author, is_anonymous=True),
            )
        )

        assert response.comment.author_name == "Anonymous"
        (notification,) = _mentions(notification_repo)
        assert notification.mentioned_by == "Anonymous"
        assert notification.title == "Anonymous mentioned you"

    @pytest.mark.asyncio
    async def test_unknown_post_raises_not_found(self, unit_env):
        """Comments need an existing post."""
        use_case = await unit_env.get(SubmitCommentUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                SubmitCommentRequest(
                    post_id=str(uuid4()), text="Hello", author=make_author()
                )
            )

    @pytest.mark.asyncio
    async def test_post_of_other_company_raises_not_found(self, unit_env):
        """Posts of another tenant are invisible."""
        use_case = await unit_env.get(SubmitCommentUseCase)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post(CompanyId(uuid4())))

        with pytest.raises(NotFoundError):
            await use_case.execute(
                SubmitCommentRequest(
                    post_id=str(post.id), text="Hello", author=make_author()
                )
            )

    @pytest.mark.asyncio
    async def test_blank_text_writes_nothing(self, unit_env):
        """Validation rejects before the comment or any notification is written."""
        # Arrange
        use_case = await unit_env.get(SubmitCommentUseCase)
        post_repo = await unit_env.get(PostRepository)
        user_repo = await unit_env.get(UserRepository)
        comment_repo = await unit_env.get(CommentRepository)
        notification_repo = await unit_env.get(NotificationRepository)
        company_id = CompanyId(uuid4())
        post = await post_repo.save(make_post(company_id))
        await user_repo.save(make_user("bob", company_id))

        # Act
        with pytest.raises(ValidationError):
            await use_case.execute(
                SubmitCommentRequest(
                    post_id=str(post.id),
                    text="   ",
                    author=make_author(company_id=company_id),
                )
            )

        # Assert
        assert await comment_repo.find_by_post(post.id) == []
        assert notification_repo.all() == []
        assert (await post_repo.find_by_id(post.id)).comment_count == 0


class TestPostAuthorNotification:
    """Tests for notifying the post author about new comments."""

    @pytest.mark.asyncio
    async def test_post_author_is_told_about_new_comment(self, unit_env):
        """The post author gets a 'comment' notification."""
        # Arrange
        use_case = await unit_env.get(SubmitCommentUseCase)
        post_repo = await unit_env.get(PostRepository)
        user_repo = await unit_env.get(UserRepository)
        notification_repo = await unit_env.get(NotificationRepository)
        company_id = CompanyId(uuid4())
        owner = await user_repo.save(make_user("olivia", company_id, "Olivia O"))
        commenter = await user_repo.save(make_user("alice", company_id, "Alice A"))
        post = await post_repo.save(
            make_post(company_id, title="Launch plan", author_id=owner.id)
        )

        # Act
        response = await use_case.execute(
            SubmitCommentRequest(
                post_id=str(post.id),
                text="Looks solid",
                author=make_author(commenter),
            )
        )

        # Assert
        assert response.post_author_notified is True
        (notification,) = notification_repo.all()
        assert notification.type == NotificationType.COMMENT
        assert notification.user_id == owner.id
        assert notification.title == "New Comment"
        assert notification.message == 'Alice A commented on your post "Launch plan"'
        assert notification.mentioned_by_id == commenter.id

    @pytest.mark.asyncio
    async def test_commenting_on_own_post_sends_nothing(self, unit_env):
        """Authors are not told about their own comments."""
        # Arrange
        use_case = await unit_env.get(SubmitCommentUseCase)
        post_repo = await unit_env.get(PostRepository)
        user_repo = await unit_env.get(UserRepository)
        notification_repo = await unit_env.get(NotificationRepository)
        company_id = CompanyId(uuid4())
        owner = await user_repo.save(make_user("olivia", company_id, "Olivia O"))
        post = await post_repo.save(make_post(company_id, author_id=owner.id))

        # Act
        response = await use_case.execute(
            SubmitCommentRequest(
                post_id=str(post.id),
                text="Adding context",
                author=make_author(owner),
            )
        )

        # Assert
        assert response.post_author_notified is False
        assert notification_repo.all() == []

    @pytest.mark.asyncio
    async def test_mentioned_post_author_gets_both_notifications(self, unit_env):
        """A mention and the new comment notice are independent."""
        # Arrange
        use_case = await unit_env.get(SubmitCommentUseCase)
        post_repo = await unit_env.get(PostRepository)
        user_repo = await unit_env.get(UserRepository)
        notification_repo = await unit_env.get(NotificationRepository)
        company_id = CompanyId(uuid4())
        owner = await user_repo.save(make_user("olivia", company_id))
        commenter = await user_repo.save(make_user("alice", company_id))
        post = await post_repo.save(make_post(company_id, author_id=owner.id))

        # Act
        response = await use_case.execute(
            SubmitCommentRequest(
                post_id=str(post.id),
                text="@olivia question for you",
                author=make_author(commenter),
            )
        )

        # Assert
        assert response.mentions_notified == 1
        assert response.post_author_notified is True
        assert sorted(n.type.value for n in notification_repo.all()) == [
            "comment",
            "mention",
        ]
