"""Post repository interface.

Posts are owned by the surrounding application; the comment engine only
needs to read them and keep their comment counter current.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from discuss.domain.model.post import Post
from discuss.domain.value import PostId


class PostRepository(ABC):
    """Repository for the Post read model."""

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def is_locked(self, post_id: PostId) -> bool:
        """Report whether the post is currently locked.

        Always queried live; a post loaded earlier in the request may be stale.
        """
        pass

    @abstractmethod
    async def record_comment(self, post_id: PostId, at: datetime) -> None:
        """Increment the post's comment counter and bump its last activity."""
        pass
