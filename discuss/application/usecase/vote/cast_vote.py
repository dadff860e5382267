"""Cast vote use case."""

from pydantic import BaseModel

from discuss.application.usecase.base import parse_id
from discuss.application.usecase.comment.common import CommentItem, CommentResponse
from discuss.domain.service import CommentService, VoteService
from discuss.domain.value import CommentId, UserId


class CastVoteRequest(BaseModel):
    """Cast vote request."""

    comment_id: str  # UUID string
    user_id: str  # User ID from authenticated user
    up: bool = True


class CastVoteUseCase:
    """Use case for upvoting or downvoting a comment."""

    def __init__(
        self, vote_service: VoteService, comment_service: CommentService
    ) -> None:
        """Initialize cast vote use case.

        Args:
            vote_service: Vote domain service
            comment_service: Comment domain service
        """
        self.vote_service = vote_service
        self.comment_service = comment_service

    async def execute(self, request: CastVoteRequest) -> CommentResponse:
        """Execute cast vote flow.

        Returns:
            The comment with updated tallies

        Raises:
            NotFoundError: If the comment does not exist
            AlreadyVotedError: If the user already voted on the comment
            ContentDeletedException: If the comment is deleted
            PostLockedError: If the post is locked
        """
        comment_id = CommentId(parse_id(request.comment_id, "comment_id"))
        user_id = UserId(parse_id(request.user_id, "user_id"))

        comment = await self.comment_service.get_comment(comment_id, user_id)
        voted = await self.vote_service.vote(comment, user_id, request.up)
        return CommentResponse(comment=CommentItem.from_comment(voted))
