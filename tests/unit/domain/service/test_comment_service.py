"""Unit tests for CommentService."""

from uuid import uuid4

import pytest

from huddle.domain.error import NotFoundError, ValidationError
from huddle.domain.repository import CommentRepository
from huddle.domain.service import CommentService
from huddle.domain.value import CommentId, CompanyId, PostId
from tests.conftest import make_author, make_comment
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


class TestValidateText:
    """Tests for validate_text."""

    @pytest.mark.asyncio
    async def test_strips_surrounding_whitespace(self, unit_env):
        """Text is stored trimmed."""
        comment_service = await unit_env.get(CommentService)

        assert comment_service.validate_text("  hello  ") == "hello"

    @pytest.mark.asyncio
    async def test_rejects_blank_text(self, unit_env):
        """Whitespace-only text is not a comment."""
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(ValidationError):
            comment_service.validate_text("   \n\t ")

    @pytest.mark.asyncio
    async def test_rejects_oversized_text(self, unit_env):
        """Text above the configured maximum is rejected."""
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(ValidationError):
            comment_service.validate_text("x" * 10001)


class TestCreateComment:
    """Tests for create_comment."""

    @pytest.mark.asyncio
    async def test_create_top_level_comment(self, unit_env):
        """Top-level comment starts with zeroed counters."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        post_id = PostId(uuid4())
        author = make_author(author_role="Engineer")

        # Act
        result = await comment_service.create_comment(
            post_id=post_id, author=author, text="  First!  "
        )

        # Assert
        assert result.text == "First!"
        assert result.parent_comment_id is None
        assert result.post_id == post_id
        assert result.company_id == author.company_id
        assert result.author_id == author.author_id
        assert result.author_name == "Fox Mulder"
        assert result.author_role == "Engineer"
        assert result.likes == 0
        assert result.reply_count == 0
        assert not result.edited
        assert await comment_repo.find_by_id(result.id) == result

    @pytest.mark.asyncio
    async def test_anonymous_author_name_is_hidden(self, unit_env):
        """Anonymous comments store the anonymous display name."""
        comment_service = await unit_env.get(CommentService)
        author = make_author(is_anonymous=True)

        result = await comment_service.create_comment(
            post_id=PostId(uuid4()), author=author, text="Whistleblowing"
        )

        assert result.is_anonymous
        assert result.author_name == "Anonymous"
        assert result.author_id == author.author_id

    @pytest.mark.asyncio
    async def test_create_reply(self, unit_env):
        """Reply points at its parent."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        company_id = CompanyId(uuid4())
        post_id = PostId(uuid4())
        parent = await comment_repo.save(make_comment(post_id, company_id=company_id))

        # Act
        reply = await comment_service.create_comment(
            post_id=post_id,
            author=make_author(company_id=company_id),
            text="Agreed",
            parent_comment_id=parent.id,
        )

        # Assert
        assert reply.parent_comment_id == parent.id
        assert reply.is_reply

    @pytest.mark.asyncio
    async def test_reply_to_missing_parent_raises(self, unit_env):
        """Parent must exist."""
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(NotFoundError):
            await comment_service.create_comment(
                post_id=PostId(uuid4()),
                author=make_author(),
                text="Hello?",
                parent_comment_id=CommentId(uuid4()),
            )

    @pytest.mark.asyncio
    async def test_reply_to_parent_on_other_post_raises(self, unit_env):
        """Parent must belong to the same post."""
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        company_id = CompanyId(uuid4())
        parent = await comment_repo.save(
            make_comment(PostId(uuid4()), company_id=company_id)
        )

        with pytest.raises(ValidationError):
            await comment_service.create_comment(
                post_id=PostId(uuid4()),
                author=make_author(company_id=company_id),
                text="Wrong thread",
                parent_comment_id=parent.id,
            )

    @pytest.mark.asyncio
    async def test_empty_text_writes_nothing(self, unit_env):
        """Validation happens before any write."""
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        post_id = PostId(uuid4())

        with pytest.raises(ValidationError):
            await comment_service.create_comment(
                post_id=post_id, author=make_author(), text=""
            )

        assert await comment_repo.find_by_post(post_id) == []


class TestGetThread:
    """Tests for get_thread."""

    @pytest.mark.asyncio
    async def test_builds_tree_and_counts_visible_comments(self, unit_env):
        """Orphans are excluded from the tree and the total."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        post_id = PostId(uuid4())
        root = await comment_repo.save(make_comment(post_id))
        await comment_repo.save(make_comment(post_id, parent=root))
        await comment_repo.save(
            make_comment(post_id, parent_comment_id=CommentId(uuid4()))
        )

        # Act
        snapshot = await comment_service.get_thread(post_id)

        # Assert
        assert snapshot.post_id == post_id
        assert [node.id for node in snapshot.tree] == [root.id]
        assert snapshot.total_count == 2


class TestUpdateText:
    """Tests for update_text."""

    @pytest.mark.asyncio
    async def test_update_marks_comment_edited(self, unit_env):
        """Editing sets edited and edited_at."""
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await comment_repo.save(make_comment(PostId(uuid4())))

        updated = await comment_service.update_text(comment.id, " Revised ")

        assert updated.text == "Revised"
        assert updated.edited
        assert updated.edited_at is not None

    @pytest.mark.asyncio
    async def test_update_missing_comment_raises(self, unit_env):
        """Cannot edit what does not exist."""
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(NotFoundError):
            await comment_service.update_text(CommentId(uuid4()), "Revised")


class TestDeleteComment:
    """Tests for delete_comment."""

    @pytest.mark.asyncio
    async def test_delete_leaves_replies_as_orphans(self, unit_env):
        """Replies stay stored but drop out of the rebuilt tree."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        post_id = PostId(uuid4())
        root = await comment_repo.save(make_comment(post_id))
        reply = await comment_repo.save(make_comment(post_id, parent=root))

        # Act
        deleted = await comment_service.delete_comment(root.id)

        # Assert
        assert deleted.id == root.id
        assert await comment_repo.find_by_id(root.id) is None
        assert await comment_repo.find_by_id(reply.id) is not None
        snapshot = await comment_service.get_thread(post_id)
        assert snapshot.tree == []
        assert snapshot.total_count == 0

    @pytest.mark.asyncio
    async def test_delete_missing_comment_raises(self, unit_env):
        """Deleting an unknown comment is an error."""
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(NotFoundError):
            await comment_service.delete_comment(CommentId(uuid4()))


class TestToggleLike:
    """Tests for toggle_like."""

    @pytest.mark.asyncio
    async def test_like_then_unlike(self, unit_env):
        """Liking adds one, unliking removes it again."""
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await comment_repo.save(make_comment(PostId(uuid4())))

        assert await comment_service.toggle_like(comment.id, is_liked=False) == 1
        assert await comment_service.toggle_like(comment.id, is_liked=True) == 0

    @pytest.mark.asyncio
    async def test_unlike_floors_at_zero(self, unit_env):
        """Likes never go negative."""
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await comment_repo.save(make_comment(PostId(uuid4())))

        assert await comment_service.toggle_like(comment.id, is_liked=True) == 0

    @pytest.mark.asyncio
    async def test_like_missing_comment_raises(self, unit_env):
        """Unknown comment cannot be liked."""
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(NotFoundError):
            await comment_service.toggle_like(CommentId(uuid4()), is_liked=False)
