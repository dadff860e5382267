"""In-memory user repository for testing."""

from typing import Optional, Sequence

from discuss.domain.model.user import User
from discuss.domain.repository.user import UserRepository
from discuss.domain.value import CommunityId, UserId

from .database import InMemoryDatabase


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self.database.users.get(user_id)

    async def find_by_ids(self, user_ids: Sequence[UserId]) -> list[User]:
        """Find many users; unknown IDs are skipped."""
        return [
            self.database.users[user_id]
            for user_id in user_ids
            if user_id in self.database.users
        ]

    async def is_moderator(self, community_id: CommunityId, user_id: UserId) -> bool:
        """Report whether the user moderates the community."""
        return (community_id, user_id) in self.database.moderators

    async def adjust_comment_count(self, user_id: UserId, delta: int) -> None:
        """Add delta to comment_count (minimum 0)."""
        user = self.database.users.get(user_id)
        if user:
            self.database.users[user_id] = user.model_copy(
                update={"comment_count": max(0, user.comment_count + delta)}
            )

    async def adjust_points(self, user_id: UserId, delta: int) -> None:
        """Add delta to the user's points."""
        user = self.database.users.get(user_id)
        if user:
            self.database.users[user_id] = user.model_copy(
                update={"points": user.points + delta}
            )

    async def save(self, user: User) -> User:
        """Save or update a user (test seeding)."""
        self.database.users[user.id] = user
        return user

    async def add_moderator(self, community_id: CommunityId, user_id: UserId) -> None:
        """Make the user a moderator of the community (test seeding)."""
        self.database.moderators.add((community_id, user_id))
