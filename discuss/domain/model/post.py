"""Post read model.

Posts and communities are owned by the surrounding application. Comments
copy a few of their fields at creation time for cheap rendering.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from discuss.domain.model.common import DomainModel, utcnow
from discuss.domain.value import AuthorityTier, CommunityId, PostId, UserId


class Post(DomainModel):
    """Post that comments attach to."""

    id: PostId
    public_id: str = Field(min_length=1, max_length=32)
    title: str = Field(min_length=1, max_length=300)
    author_id: UserId
    community_id: CommunityId
    community_name: str
    comment_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=utcnow)
    last_activity_at: datetime = Field(default_factory=utcnow)
    locked_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None
    deleted_as: Optional[AuthorityTier] = None

    @property
    def is_locked(self) -> bool:
        return self.locked_at is not None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None
