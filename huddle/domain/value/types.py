"""Domain value objects for Huddle.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import Field, field_validator

from huddle.domain.value.common import RootValueObject, ValueObject
from huddle.domain.value.identifiers import CommentId, CompanyId, PostId, UserId

# Characters allowed in a username / mention token
USERNAME_CHARS = r"[\w.-]"
USERNAME_PATTERN = re.compile(rf"^{USERNAME_CHARS}+$")


class NotificationType(str, Enum):
    """Kind of notification delivered to a member."""

    MENTION = "mention"
    COMMENT = "comment"


class UserStatus(str, Enum):
    """Membership status of a user within a tenant."""

    ACTIVE = "active"
    SUSPENDED = "suspended"


class Username(RootValueObject[str]):
    """Tenant-unique username used in @mentions.

    Letters, digits, underscore, period and hyphen, 3-30 characters.
    """

    @field_validator("root")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Validate username format."""
        if not USERNAME_PATTERN.match(v) or not 3 <= len(v) <= 30:
            raise ValueError(
                "Username must be 3-30 characters of letters, digits, '_', '.' or '-'"
            )
        return v


class AuthorContext(ValueObject):
    """Identity of the member authoring a comment.

    Supplied by the (already authenticated) caller.
    """

    author_id: UserId
    author_name: str = Field(min_length=1, max_length=255)
    author_role: str | None = None
    company_id: CompanyId
    is_anonymous: bool = False


class MentionContext(ValueObject):
    """Where a mention was authored, used to address notifications."""

    post_id: PostId
    post_title: str
    author_id: UserId
    author_name: str
    comment_id: CommentId | None = None


class MentionDispatchResult(ValueObject):
    """Outcome of a mention notification fan-out."""

    success: bool
    count: int = Field(ge=0)
