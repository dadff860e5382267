"""Change user group use case."""

from pydantic import BaseModel

from discuss.application.usecase.base import parse_id
from discuss.domain.service import CommentService
from discuss.domain.value import CommentId, UserId

from .common import CommentItem, CommentResponse


class ChangeUserGroupRequest(BaseModel):
    """Change the tier a comment is presented under."""

    comment_id: str  # UUID string
    author_id: str  # Current user ID (must be author)
    tier: str  # self, moderator or admin


class ChangeUserGroupUseCase:
    """Use case for re-badging a comment as moderator, admin or plain user."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: ChangeUserGroupRequest) -> CommentResponse:
        """Execute change user group flow.

        Raises:
            NotFoundError: If the comment does not exist
            NotAuthorError: If the caller is not the author
            InvalidAuthorityError: If the tier is not recognized
            NotModeratorError / NotAdminError: If the author lacks the tier
        """
        comment_id = CommentId(parse_id(request.comment_id, "comment_id"))
        author_id = UserId(parse_id(request.author_id, "author_id"))

        comment = await self.comment_service.get_comment(comment_id, author_id)
        updated = await self.comment_service.change_user_group(
            comment, author_id, request.tier
        )
        return CommentResponse(comment=CommentItem.from_comment(updated))
