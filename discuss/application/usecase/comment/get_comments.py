"""Get comments use case."""

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from discuss.application.usecase.base import parse_optional_id
from discuss.domain.error import ValidationError
from discuss.domain.service import CommentService
from discuss.domain.value import CommentFilter, UserId

from .common import CommentItem


class GetCommentsRequest(BaseModel):
    """Get comments request.

    All set criteria are combined.
    """

    post_id: str | None = None
    author_id: str | None = None
    parent_id: str | None = None
    top_level_only: bool = False
    descendants_of: str | None = None
    include_deleted: bool = True
    limit: int | None = Field(default=None, ge=1)
    offset: int = Field(default=0, ge=0)
    viewer_id: str | None = None  # Authenticated user, if any


class GetCommentsResponse(BaseModel):
    """Get comments response."""

    comments: list[CommentItem]
    total: int


class GetCommentsUseCase:
    """Use case for listing comments, oldest first."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize get comments use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: GetCommentsRequest) -> GetCommentsResponse:
        """Execute get comments flow.

        Raises:
            ValidationError: If an ID is malformed or the criteria contradict
        """
        try:
            comment_filter = CommentFilter(
                post_id=parse_optional_id(request.post_id, "post_id"),
                author_id=parse_optional_id(request.author_id, "author_id"),
                parent_id=parse_optional_id(request.parent_id, "parent_id"),
                top_level_only=request.top_level_only,
                descendants_of=parse_optional_id(
                    request.descendants_of, "descendants_of"
                ),
                include_deleted=request.include_deleted,
                limit=request.limit,
                offset=request.offset,
            )
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid comment filter: {e}") from e

        viewer_id = parse_optional_id(request.viewer_id, "viewer_id")
        comments = await self.comment_service.get_comments(
            comment_filter, UserId(viewer_id) if viewer_id else None
        )

        items = [CommentItem.from_comment(comment) for comment in comments]
        return GetCommentsResponse(comments=items, total=len(items))
