"""In-memory user repository for testing."""

from typing import Optional

from huddle.domain.model.user import User
from huddle.domain.repository.user import UserRepository
from huddle.domain.value import CompanyId, UserId, UserStatus


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_username(
        self, username: str, company_id: CompanyId
    ) -> Optional[User]:
        """Find a user by exact username within a company."""
        for user in self._users.values():
            if user.company_id == company_id and user.username.root == username:
                return user
        return None

    async def search(self, company_id: CompanyId, limit: int = 50) -> list[User]:
        """List active users of a company ordered by username."""
        users = [
            u
            for u in self._users.values()
            if u.company_id == company_id and u.status == UserStatus.ACTIVE
        ]
        users.sort(key=lambda u: u.username.root)
        return users[:limit]

    async def save(self, user: User) -> User:
        """Save or update a user."""
        self._users[user.id] = user
        return user
