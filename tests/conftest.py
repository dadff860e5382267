"""Test configuration and helpers."""

from uuid import uuid4

from discuss.domain.model import Post, User
from discuss.domain.value import CommunityId, PostId, UserId


def make_user(
    username: str = "alice",
    is_admin: bool = False,
    points: int = 0,
) -> User:
    """Build a user with a fresh ID."""
    return User(
        id=UserId(uuid4()),
        username=username,
        is_admin=is_admin,
        points=points,
    )


def make_post(
    author_id: UserId,
    community_id: CommunityId | None = None,
    title: str = "Test Post",
    locked: bool = False,
    deleted: bool = False,
) -> Post:
    """Build a post with a fresh ID in a (fresh, unless given) community."""
    post_id = PostId(uuid4())
    post = Post(
        id=post_id,
        public_id=post_id.hex[:8],
        title=title,
        author_id=author_id,
        community_id=community_id or CommunityId(uuid4()),
        community_name="general",
    )
    if locked:
        post = post.model_copy(update={"locked_at": post.created_at})
    if deleted:
        post = post.model_copy(update={"deleted_at": post.created_at})
    return post
