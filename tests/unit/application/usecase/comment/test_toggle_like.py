"""Unit tests for ToggleCommentLikeUseCase."""

from uuid import uuid4

import pytest

from huddle.application.usecase.comment import (
    ToggleCommentLikeRequest,
    ToggleCommentLikeUseCase,
)
from huddle.domain.error import NotFoundError
from huddle.domain.repository import CommentRepository
from huddle.domain.value import PostId
from tests.conftest import make_comment
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestToggleCommentLikeUseCase:
    """Tests for ToggleCommentLikeUseCase."""

    @pytest.mark.asyncio
    async def test_like_flips_state_and_counts(self, unit_env):
        """Liking returns the new count and the new liked state."""
        use_case = await unit_env.get(ToggleCommentLikeUseCase)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await comment_repo.save(make_comment(PostId(uuid4()), likes=4))

        response = await use_case.execute(
            ToggleCommentLikeRequest(comment_id=str(comment.id), is_liked=False)
        )

        assert response.likes == 5
        assert response.is_liked
        assert response.comment_id == str(comment.id)

    @pytest.mark.asyncio
    async def test_unlike(self, unit_env):
        """Unliking removes one like."""
        use_case = await unit_env.get(ToggleCommentLikeUseCase)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await comment_repo.save(make_comment(PostId(uuid4()), likes=4))

        response = await use_case.execute(
            ToggleCommentLikeRequest(comment_id=str(comment.id), is_liked=True)
        )

        assert response.likes == 3
        assert not response.is_liked

    @pytest.mark.asyncio
    async def test_missing_comment_fails(self, unit_env):
        """Unknown comment id is not found."""
        use_case = await unit_env.get(ToggleCommentLikeUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                ToggleCommentLikeRequest(comment_id=str(uuid4()), is_liked=False)
            )
