"""User repository interface (user resolver)."""

from abc import ABC, abstractmethod
from typing import List, Optional

from huddle.domain.model.user import User
from huddle.domain.value import CompanyId, UserId


class UserRepository(ABC):
    """Repository for tenant members."""

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        pass

    @abstractmethod
    async def find_by_username(self, username: str, company_id: CompanyId) -> Optional[User]:
        """Resolve a username within a tenant.

        Matching is exact (case-sensitive).

        Args:
            username: Username as typed after ``@``
            company_id: Tenant scope

        Returns:
            The user if one exists in the tenant, None otherwise
        """
        pass

    @abstractmethod
    async def search(self, company_id: CompanyId, limit: int = 50) -> List[User]:
        """List active users of a tenant ordered by username.

        Args:
            company_id: Tenant scope
            limit: Maximum number of users

        Returns:
            Active users, ascending by username
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update)."""
        pass
