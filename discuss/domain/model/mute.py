"""Mute record."""

from datetime import datetime

from pydantic import Field

from discuss.domain.model.common import DomainModel, utcnow
from discuss.domain.value import UserId


class MuteRecord(DomainModel):
    """A user's decision to mute another user."""

    user_id: UserId
    muted_user_id: UserId
    created_at: datetime = Field(default_factory=utcnow)
