"""User repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from discuss.domain.model.user import User
from discuss.domain.value import CommunityId, UserId


class UserRepository(ABC):
    """Repository for the User read model.

    Accounts are owned by the surrounding application. The comment engine
    reads them and maintains two counters: comment_count and points.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, user_ids: Sequence[UserId]) -> List[User]:
        """Find many users in one lookup; unknown IDs are skipped."""
        pass

    @abstractmethod
    async def is_moderator(self, community_id: CommunityId, user_id: UserId) -> bool:
        """Report whether the user moderates the community."""
        pass

    @abstractmethod
    async def adjust_comment_count(self, user_id: UserId, delta: int) -> None:
        """Atomically add delta to the user's comment counter."""
        pass

    @abstractmethod
    async def adjust_points(self, user_id: UserId, delta: int) -> None:
        """Atomically add delta to the user's reputation points."""
        pass
