"""Moderation report repository interface."""

from abc import ABC, abstractmethod

from discuss.domain.value import CommentId


class ReportRepository(ABC):
    """Write access to pending moderation reports."""

    @abstractmethod
    async def remove_for_comment(self, comment_id: CommentId) -> int:
        """Delete every pending report about a comment.

        Returns:
            Number of reports removed
        """
        pass
