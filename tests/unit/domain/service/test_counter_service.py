"""Unit tests for CounterService."""

from uuid import uuid4

import pytest

from huddle.config import CommentSettings
from huddle.domain.repository import CommentRepository, PostRepository
from huddle.domain.service import CounterService
from huddle.domain.value import CompanyId
from tests.conftest import make_comment, make_post
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def _seed(unit_env):
    comment_repo = await unit_env.get(CommentRepository)
    post_repo = await unit_env.get(PostRepository)
    post = await post_repo.save(make_post(CompanyId(uuid4())))
    parent = await comment_repo.save(make_comment(post.id))
    reply = await comment_repo.save(make_comment(post.id, parent=parent))
    return comment_repo, post_repo, post, parent, reply


class TestCounterServiceCountingReplies:
    """Default convention: the post total counts replies too."""

    @pytest.mark.asyncio
    async def test_top_level_comment_increments_post_total(self, unit_env):
        """A new top-level comment bumps only the post total."""
        # Arrange
        counter_service = await unit_env.get(CounterService)
        comment_repo, post_repo, post, parent, _ = await _seed(unit_env)

        # Act
        await counter_service.on_comment_created(parent)

        # Assert
        assert (await post_repo.find_by_id(post.id)).comment_count == 1
        assert (await comment_repo.find_by_id(parent.id)).reply_count == 0

    @pytest.mark.asyncio
    async def test_reply_increments_parent_and_post_total(self, unit_env):
        """A reply bumps its parent's reply_count and the post total."""
        counter_service = await unit_env.get(CounterService)
        comment_repo, post_repo, post, parent, reply = await _seed(unit_env)

        await counter_service.on_comment_created(reply)

        assert (await post_repo.find_by_id(post.id)).comment_count == 1
        assert (await comment_repo.find_by_id(parent.id)).reply_count == 1

    @pytest.mark.asyncio
    async def test_delete_mirrors_create(self, unit_env):
        """Deleting reverts exactly what creating applied."""
        counter_service = await unit_env.get(CounterService)
        comment_repo, post_repo, post, parent, reply = await _seed(unit_env)
        await counter_service.on_comment_created(parent)
        await counter_service.on_comment_created(reply)

        await counter_service.on_comment_deleted(reply)

        assert (await post_repo.find_by_id(post.id)).comment_count == 1
        assert (await comment_repo.find_by_id(parent.id)).reply_count == 0

    @pytest.mark.asyncio
    async def test_counters_never_go_negative(self, unit_env):
        """Decrementing from zero floors at zero."""
        counter_service = await unit_env.get(CounterService)
        comment_repo, post_repo, post, parent, reply = await _seed(unit_env)

        await counter_service.on_comment_deleted(reply)
        await counter_service.on_comment_deleted(parent)

        assert (await post_repo.find_by_id(post.id)).comment_count == 0
        assert (await comment_repo.find_by_id(parent.id)).reply_count == 0


class TestCounterServiceTopLevelOnly:
    """Alternative convention: the post total counts top-level comments."""

    @pytest.mark.asyncio
    async def test_reply_leaves_post_total_alone(self, unit_env):
        """Only the parent's reply_count moves for a reply."""
        # Arrange
        comment_repo, post_repo, post, parent, reply = await _seed(unit_env)
        counter_service = CounterService(
            comment_repository=comment_repo,
            post_repository=post_repo,
            settings=CommentSettings(count_replies_in_post_total=False),
        )

        # Act
        await counter_service.on_comment_created(parent)
        await counter_service.on_comment_created(reply)

        # Assert
        assert (await post_repo.find_by_id(post.id)).comment_count == 1
        assert (await comment_repo.find_by_id(parent.id)).reply_count == 1

    @pytest.mark.asyncio
    async def test_deleting_reply_leaves_post_total_alone(self, unit_env):
        """Delete mirrors create under this convention too."""
        comment_repo, post_repo, post, parent, reply = await _seed(unit_env)
        counter_service = CounterService(
            comment_repository=comment_repo,
            post_repository=post_repo,
            settings=CommentSettings(count_replies_in_post_total=False),
        )
        await counter_service.on_comment_created(parent)
        await counter_service.on_comment_created(reply)

        await counter_service.on_comment_deleted(reply)

        assert (await post_repo.find_by_id(post.id)).comment_count == 1
        assert (await comment_repo.find_by_id(parent.id)).reply_count == 0
