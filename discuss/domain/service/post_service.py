"""Post lookups for comment use cases."""

import logfire

from discuss.domain.error import NotFoundError
from discuss.domain.model.post import Post
from discuss.domain.repository import PostRepository
from discuss.domain.value import PostId

from .base import Service


class PostService(Service):
    """Loads the post a comment is being attached to.

    Locked and deleted posts are still returned; CommentService decides
    whether they accept comments.
    """

    def __init__(self, post_repository: PostRepository) -> None:
        self.post_repository = post_repository

    async def get_by_id(self, post_id: PostId) -> Post:
        """Raises NotFoundError for an unknown post."""
        with logfire.span("post_service.get_by_id", post_id=str(post_id)):
            post = await self.post_repository.find_by_id(post_id)
            if post is None:
                logfire.warn("Unknown post", post_id=str(post_id))
                raise NotFoundError("Post", str(post_id))
            return post
