"""Domain model entities for discuss."""

from discuss.domain.model.comment import Comment
from discuss.domain.model.mute import MuteRecord
from discuss.domain.model.post import Post
from discuss.domain.model.user import User
from discuss.domain.model.vote import Vote

__all__ = [
    "Comment",
    "MuteRecord",
    "Post",
    "User",
    "Vote",
]
