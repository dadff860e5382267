"""In-memory post repository for testing."""

from datetime import datetime
from typing import Optional

from discuss.domain.model.post import Post
from discuss.domain.repository.post import PostRepository
from discuss.domain.value import PostId

from .database import InMemoryDatabase


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        return self.database.posts.get(post_id)

    async def is_locked(self, post_id: PostId) -> bool:
        """Report whether the post is currently locked."""
        post = self.database.posts.get(post_id)
        return post is not None and post.is_locked

    async def record_comment(self, post_id: PostId, at: datetime) -> None:
        """Increment comment_count and bump last activity."""
        post = self.database.posts.get(post_id)
        if post:
            self.database.posts[post_id] = post.model_copy(
                update={
                    "comment_count": post.comment_count + 1,
                    "last_activity_at": at,
                }
            )

    async def save(self, post: Post) -> Post:
        """Save or update a post (test seeding)."""
        self.database.posts[post.id] = post
        return post
