"""User read model.

User accounts are owned by the surrounding application; the comment engine
only reads them and adjusts the denormalized counters it is responsible for.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from discuss.domain.model.common import DomainModel, utcnow
from discuss.domain.value import UserId


class User(DomainModel):
    """User account as seen by the comment engine."""

    id: UserId
    username: str = Field(min_length=1, max_length=64)
    is_admin: bool = False
    points: int = 0  # Reputation earned from upvotes on the user's content
    comment_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=utcnow)
    deleted_at: Optional[datetime] = None
