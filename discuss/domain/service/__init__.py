"""Domain services."""

from .authority_service import AuthorityService, parse_authority_tier
from .base import Service
from .comment_service import CommentService
from .notification_service import NotificationDispatcher, NotificationSink
from .post_service import PostService
from .user_service import UserService
from .vote_service import VoteService, is_duplicate_vote

__all__ = [
    "AuthorityService",
    "CommentService",
    "NotificationDispatcher",
    "NotificationSink",
    "PostService",
    "Service",
    "UserService",
    "VoteService",
    "is_duplicate_vote",
    "parse_authority_tier",
]
