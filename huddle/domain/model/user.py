"""User entity (tenant member)."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from huddle.domain.model.common import DomainModel
from huddle.domain.value import CompanyId, UserId, Username, UserStatus


class User(DomainModel):
    """Member of a tenant that can be mentioned by username."""

    id: UserId
    company_id: CompanyId
    username: Username
    display_name: Optional[str] = None
    role: Optional[str] = None
    status: UserStatus = UserStatus.ACTIVE
    avatar_url: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.now)
