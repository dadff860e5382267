"""Domain value objects for discuss."""

from discuss.domain.value.identifiers import (
    CommentId,
    CommunityId,
    PostId,
    UserId,
    VoteId,
)
from discuss.domain.value.tally import TallyDelta
from discuss.domain.value.types import (
    AuthorityTier,
    CommentFilter,
    NotificationType,
)

__all__ = [
    # Identifiers
    "UserId",
    "PostId",
    "CommunityId",
    "CommentId",
    "VoteId",
    # Types
    "AuthorityTier",
    "CommentFilter",
    "NotificationType",
    "TallyDelta",
]
