"""Post entity.

Only the fields the comment engine needs: the title (used in mention
notifications) and the aggregate comment counter.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from huddle.domain.model.common import DomainModel
from huddle.domain.value import CompanyId, PostId, UserId


class Post(DomainModel):
    """Post that comments are attached to."""

    id: PostId
    company_id: CompanyId
    title: str = Field(min_length=1, max_length=300)
    author_id: UserId
    comment_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: Optional[datetime] = None
