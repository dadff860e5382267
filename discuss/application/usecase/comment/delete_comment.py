"""Delete comment use case."""

from pydantic import BaseModel

from discuss.application.usecase.base import parse_id
from discuss.domain.service import CommentService
from discuss.domain.value import CommentId, UserId

from .common import CommentItem, CommentResponse


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: str  # UUID string
    actor_id: str  # Current user ID
    tier: str = "self"  # self, moderator or admin


class DeleteCommentUseCase:
    """Use case for soft deleting a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize delete comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: DeleteCommentRequest) -> CommentResponse:
        """Execute delete comment flow.

        Returns:
            The redacted comment

        Raises:
            NotFoundError: If the comment does not exist
            InvalidAuthorityError: If the tier is not recognized
            NotAuthorizedError: If the actor does not hold the tier
            ContentDeletedException: If the comment is already deleted
        """
        comment_id = CommentId(parse_id(request.comment_id, "comment_id"))
        actor_id = UserId(parse_id(request.actor_id, "actor_id"))

        comment = await self.comment_service.get_comment(comment_id)
        deleted = await self.comment_service.delete_comment(
            comment, actor_id, request.tier
        )
        return CommentResponse(comment=CommentItem.from_comment(deleted))
