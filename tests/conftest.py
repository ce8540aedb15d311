"""Test configuration and fixtures."""

from datetime import datetime, timedelta
from itertools import count
from uuid import uuid4

from huddle.domain.model import Comment, Post, User
from huddle.domain.value import (
    AuthorContext,
    CommentId,
    CompanyId,
    PostId,
    UserId,
    Username,
)

BASE_TIME = datetime(2026, 1, 5, 9, 0, 0)
_ticks = count()


def next_timestamp() -> datetime:
    """Strictly increasing timestamps, so creation order is unambiguous."""
    return BASE_TIME + timedelta(seconds=next(_ticks))


def make_user(
    username: str,
    company_id: CompanyId,
    display_name: str | None = None,
    **overrides,
) -> User:
    """Build a tenant member."""
    return User(
        id=overrides.pop("id", UserId(uuid4())),
        company_id=company_id,
        username=Username(username),
        display_name=display_name,
        **overrides,
    )


def make_post(
    company_id: CompanyId, title: str = "Quarterly planning", **overrides
) -> Post:
    """Build a post with zeroed counters."""
    return Post(
        id=overrides.pop("id", PostId(uuid4())),
        company_id=company_id,
        title=title,
        author_id=overrides.pop("author_id", UserId(uuid4())),
        **overrides,
    )


def make_comment(
    post_id: PostId,
    parent: Comment | None = None,
    text: str = "Looks good to me",
    **overrides,
) -> Comment:
    """Build a comment (a reply when ``parent`` is given)."""
    return Comment(
        id=overrides.pop("id", CommentId(uuid4())),
        post_id=post_id,
        company_id=overrides.pop("company_id", CompanyId(uuid4())),
        parent_comment_id=(
            parent.id if parent else overrides.pop("parent_comment_id", None)
        ),
        author_id=overrides.pop("author_id", UserId(uuid4())),
        author_name=overrides.pop("author_name", "Dana Scully"),
        text=text,
        created_at=overrides.pop("created_at", next_timestamp()),
        **overrides,
    )


def make_author(
    user: User | None = None, company_id: CompanyId | None = None, **overrides
) -> AuthorContext:
    """Author context for ``user`` (or a fresh member)."""
    if user is not None:
        return AuthorContext(
            author_id=user.id,
            author_name=user.display_name or user.username.root,
            author_role=user.role,
            company_id=user.company_id,
            **overrides,
        )
    return AuthorContext(
        author_id=UserId(uuid4()),
        author_name=overrides.pop("author_name", "Fox Mulder"),
        company_id=company_id or CompanyId(uuid4()),
        **overrides,
    )


def author_payload(author: AuthorContext) -> dict:
    """JSON body fragment for an author context."""
    return author.model_dump(mode="json")
