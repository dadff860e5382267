"""Add comment use case."""

from pydantic import BaseModel

from discuss.application.usecase.base import parse_id, parse_optional_id
from discuss.domain.service import CommentService, PostService, UserService
from discuss.domain.value import CommentId, PostId, UserId

from .common import CommentItem, CommentResponse


class AddCommentRequest(BaseModel):
    """Add comment request."""

    post_id: str  # UUID string
    author_id: str  # User ID from authenticated user
    body: str
    parent_id: str | None = None  # Parent comment ID for replies


class AddCommentUseCase:
    """Use case for commenting on a post or replying to another comment."""

    def __init__(
        self,
        comment_service: CommentService,
        post_service: PostService,
        user_service: UserService,
    ) -> None:
        """Initialize add comment use case.

        Args:
            comment_service: Comment domain service
            post_service: Post domain service
            user_service: User domain service
        """
        self.comment_service = comment_service
        self.post_service = post_service
        self.user_service = user_service

    async def execute(self, request: AddCommentRequest) -> CommentResponse:
        """Execute add comment flow.

        Steps:
        1. Load the post and the author
        2. Create the comment (service validates the parent and fans out counters)

        Raises:
            ValidationError: If an ID is malformed
            NotFoundError: If the post, author or parent does not exist
        """
        post_id = PostId(parse_id(request.post_id, "post_id"))
        author_id = UserId(parse_id(request.author_id, "author_id"))
        parent_id = parse_optional_id(request.parent_id, "parent_id")

        post = await self.post_service.get_by_id(post_id)
        author = await self.user_service.get_by_id(author_id)

        comment = await self.comment_service.add_comment(
            post=post,
            author=author,
            text=request.body,
            parent_id=CommentId(parent_id) if parent_id else None,
        )
        return CommentResponse(comment=CommentItem.from_comment(comment))
