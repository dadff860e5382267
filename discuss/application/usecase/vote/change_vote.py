"""Change vote use case."""

from pydantic import BaseModel

from discuss.application.usecase.base import parse_id
from discuss.application.usecase.comment.common import CommentItem, CommentResponse
from discuss.domain.service import CommentService, VoteService
from discuss.domain.value import CommentId, UserId


class ChangeVoteRequest(BaseModel):
    """Change vote request."""

    comment_id: str  # UUID string
    user_id: str  # User ID from authenticated user
    up: bool


class ChangeVoteUseCase:
    """Use case for flipping the direction of an existing vote."""

    def __init__(
        self, vote_service: VoteService, comment_service: CommentService
    ) -> None:
        self.vote_service = vote_service
        self.comment_service = comment_service

    async def execute(self, request: ChangeVoteRequest) -> CommentResponse:
        """Execute change vote flow.

        Raises:
            NotFoundError: If the comment or the user's vote does not exist
            ContentDeletedException: If the comment is deleted
            PostLockedError: If the post is locked
        """
        comment_id = CommentId(parse_id(request.comment_id, "comment_id"))
        user_id = UserId(parse_id(request.user_id, "user_id"))

        comment = await self.comment_service.get_comment(comment_id, user_id)
        changed = await self.vote_service.change_vote(comment, user_id, request.up)
        return CommentResponse(comment=CommentItem.from_comment(changed))
