"""Get comment use case."""

from pydantic import BaseModel

from discuss.application.usecase.base import parse_id, parse_optional_id
from discuss.domain.service import CommentService
from discuss.domain.value import CommentId, UserId

from .common import CommentItem, CommentResponse


class GetCommentRequest(BaseModel):
    """Get comment request."""

    comment_id: str  # UUID string
    viewer_id: str | None = None  # Authenticated user, if any


class GetCommentUseCase:
    """Use case for reading a single comment."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: GetCommentRequest) -> CommentResponse:
        comment_id = CommentId(parse_id(request.comment_id, "comment_id"))
        viewer_id = parse_optional_id(request.viewer_id, "viewer_id")

        comment = await self.comment_service.get_comment(
            comment_id, UserId(viewer_id) if viewer_id else None
        )
        return CommentResponse(comment=CommentItem.from_comment(comment))
