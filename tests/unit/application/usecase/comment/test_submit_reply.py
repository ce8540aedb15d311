"""Unit tests for SubmitReplyUseCase."""

from uuid import uuid4

import pytest
from dishka import Provider, Scope, provide

from huddle.application.usecase.comment import SubmitReplyRequest, SubmitReplyUseCase
from huddle.config import CommentSettings
from huddle.domain.error import NotFoundError, ValidationError
from huddle.domain.repository import (
    CommentRepository,
    NotificationRepository,
    PostRepository,
    UserRepository,
)
from huddle.domain.value import CompanyId
from tests.conftest import make_author, make_comment, make_post, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TopLevelOnlyCounting(Provider):
    """Post totals count top-level comments only."""

    @provide(scope=Scope.APP)
    def get_comment_settings(self) -> CommentSettings:
        return CommentSettings(count_replies_in_post_total=False)


top_level_env = create_env_fixture(overrides=[TopLevelOnlyCounting()])


async def _seed_thread(env, company_id):
    post_repo = await env.get(PostRepository)
    comment_repo = await env.get(CommentRepository)
    post = await post_repo.save(make_post(company_id, title="Hiring"))
    parent = await comment_repo.save(make_comment(post.id, company_id=company_id))
    return post, parent


class TestSubmitReplyUseCase:
    """Tests for SubmitReplyUseCase."""

    @pytest.mark.asyncio
    async def test_reply_bumps_parent_and_post_counts(self, unit_env):
        """Default convention counts replies in the post total."""
        # Arrange
        use_case = await unit_env.get(SubmitReplyUseCase)
        comment_repo = await unit_env.get(CommentRepository)
        post_repo = await unit_env.get(PostRepository)
        company_id = CompanyId(uuid4())
        post, parent = await _seed_thread(unit_env, company_id)

        # Act
        response = await use_case.execute(
            SubmitReplyRequest(
                parent_comment_id=str(parent.id),
                text="+1",
                author=make_author(company_id=company_id),
            )
        )

        # Assert
        assert response.comment.parent_comment_id == str(parent.id)
        assert response.comment.post_id == str(post.id)
        assert (await comment_repo.find_by_id(parent.id)).reply_count == 1
        assert (await post_repo.find_by_id(post.id)).comment_count == 1

    @pytest.mark.asyncio
    async def test_reply_mentions_point_at_parent_comment(self, unit_env):
        """Notifications from a reply carry the parent comment id."""
        # Arrange
        use_case = await unit_env.get(SubmitReplyUseCase)
        user_repo = await unit_env.get(UserRepository)
        notification_repo = await unit_env.get(NotificationRepository)
        company_id = CompanyId(uuid4())
        _, parent = await _seed_thread(unit_env, company_id)
        author = await user_repo.save(make_user("alice", company_id, "Alice A"))
        await user_repo.save(make_user("bob", company_id))

        # Act
        response = await use_case.execute(
            SubmitReplyRequest(
                parent_comment_id=str(parent.id),
                text="@bob see above",
                author=make_author(author),
            )
        )

        # Assert
        assert response.mentions_notified == 1
        (notification,) = notification_repo.all()
        assert notification.comment_id == parent.id
        assert notification.message == 'Mentioned you in a comment on "Hiring"'

    @pytest.mark.asyncio
    async def test_unknown_parent_raises_not_found(self, unit_env):
        """Parent must exist."""
        use_case = await unit_env.get(SubmitReplyUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                SubmitReplyRequest(
                    parent_comment_id=str(uuid4()),
                    text="Anyone?",
                    author=make_author(),
                )
            )

    @pytest.mark.asyncio
    async def test_mismatched_post_raises_validation_error(self, unit_env):
        """A reply cannot move the thread to another post."""
        use_case = await unit_env.get(SubmitReplyUseCase)
        company_id = CompanyId(uuid4())
        _, parent = await _seed_thread(unit_env, company_id)

        with pytest.raises(ValidationError):
            await use_case.execute(
                SubmitReplyRequest(
                    parent_comment_id=str(parent.id),
                    post_id=str(uuid4()),
                    text="Wrong place",
                    author=make_author(company_id=company_id),
                )
            )

    @pytest.mark.asyncio
    async def test_reply_into_another_company_writes_nothing(self, unit_env):
        """Cross-company replies fail before any comment or notification."""
        # Arrange
        use_case = await unit_env.get(SubmitReplyUseCase)
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)
        user_repo = await unit_env.get(UserRepository)
        notification_repo = await unit_env.get(NotificationRepository)
        other_company = CompanyId(uuid4())
        own_company = CompanyId(uuid4())
        post = await post_repo.save(
            make_post(other_company, title="Secret layoffs plan")
        )
        parent = await comment_repo.save(
            make_comment(post.id, company_id=other_company)
        )
        author = await user_repo.save(make_user("mallory", own_company))
        bob = await user_repo.save(make_user("bob", own_company))

        # Act
        with pytest.raises(ValidationError):
            await use_case.execute(
                SubmitReplyRequest(
                    parent_comment_id=str(parent.id),
                    text="hey @bob",
                    author=make_author(author),
                )
            )

        # Assert
        assert [n for n in notification_repo.all() if n.user_id == bob.id] == []
        assert notification_repo.all() == []
        assert await comment_repo.find_by_post(post.id) == [parent]
        assert (await post_repo.find_by_id(post.id)).comment_count == 0

    @pytest.mark.asyncio
    async def test_top_level_only_counting(self, top_level_env):
        """With replies excluded, only the parent's reply_count moves."""
        # Arrange
        use_case = await top_level_env.get(SubmitReplyUseCase)
        comment_repo = await top_level_env.get(CommentRepository)
        post_repo = await top_level_env.get(PostRepository)
        company_id = CompanyId(uuid4())
        post, parent = await _seed_thread(top_level_env, company_id)

        # Act
        await use_case.execute(
            SubmitReplyRequest(
                parent_comment_id=str(parent.id),
                text="Noted",
                author=make_author(company_id=company_id),
            )
        )

        # Assert
        assert (await comment_repo.find_by_id(parent.id)).reply_count == 1
        assert (await post_repo.find_by_id(post.id)).comment_count == 0
