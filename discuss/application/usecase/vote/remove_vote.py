"""Remove vote use case."""

from pydantic import BaseModel

from discuss.application.usecase.base import parse_id
from discuss.application.usecase.comment.common import CommentItem, CommentResponse
from discuss.domain.service import CommentService, VoteService
from discuss.domain.value import CommentId, UserId


class RemoveVoteRequest(BaseModel):
    """Remove vote request."""

    comment_id: str  # UUID string
    user_id: str  # User ID from authenticated user


class RemoveVoteUseCase:
    """Use case for retracting a vote."""

    def __init__(
        self, vote_service: VoteService, comment_service: CommentService
    ) -> None:
        """Initialize remove vote use case.

        Args:
            vote_service: Vote domain service
            comment_service: Comment domain service
        """
        self.vote_service = vote_service
        self.comment_service = comment_service

    async def execute(self, request: RemoveVoteRequest) -> CommentResponse:
        """Execute remove vote flow.

        Raises:
            NotFoundError: If the comment or the user's vote does not exist
            ContentDeletedException: If the comment is deleted
            PostLockedError: If the post is locked
        """
        comment_id = CommentId(parse_id(request.comment_id, "comment_id"))
        user_id = UserId(parse_id(request.user_id, "user_id"))

        comment = await self.comment_service.get_comment(comment_id, user_id)
        removed = await self.vote_service.delete_vote(comment, user_id)
        return CommentResponse(comment=CommentItem.from_comment(removed))
