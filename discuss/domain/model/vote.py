"""Vote entity.

Each user holds at most one vote per comment. The vote is either up or down
and can be flipped in place or retracted.
"""

from datetime import datetime

from pydantic import Field

from discuss.domain.model.common import DomainModel, utcnow
from discuss.domain.value import CommentId, UserId, VoteId


class Vote(DomainModel):
    """Vote entity.

    Business rules:
    - One vote per user per comment (enforced by database unique constraint)
    - Votes outlive the comment's deletion; its counters are frozen instead
    """

    id: VoteId
    comment_id: CommentId
    user_id: UserId
    up: bool
    created_at: datetime = Field(default_factory=utcnow)
