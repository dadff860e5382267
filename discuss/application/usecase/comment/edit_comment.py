"""Edit comment use case."""

from pydantic import BaseModel

from discuss.application.usecase.base import parse_id
from discuss.domain.service import CommentService
from discuss.domain.value import CommentId, UserId

from .common import CommentItem, CommentResponse


class EditCommentRequest(BaseModel):
    """Edit comment request."""

    comment_id: str  # UUID string
    editor_id: str  # Current user ID (must be author)
    body: str


class EditCommentUseCase:
    """Use case for replacing a comment's body."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize edit comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: EditCommentRequest) -> CommentResponse:
        """Execute edit comment flow.

        Raises:
            NotFoundError: If the comment does not exist
            NotAuthorError: If the editor is not the author
            ContentDeletedException: If the comment is deleted
        """
        comment_id = CommentId(parse_id(request.comment_id, "comment_id"))
        editor_id = UserId(parse_id(request.editor_id, "editor_id"))

        comment = await self.comment_service.get_comment(comment_id, editor_id)
        updated = await self.comment_service.save_comment(
            comment, editor_id, request.body
        )
        return CommentResponse(comment=CommentItem.from_comment(updated))
