"""Mute list repository interface."""

from abc import ABC, abstractmethod
from typing import List

from discuss.domain.model.mute import MuteRecord
from discuss.domain.value import UserId


class MuteRepository(ABC):
    """Read access to users' mute lists."""

    @abstractmethod
    async def find_muted_users(self, user_id: UserId) -> List[MuteRecord]:
        """Find the users muted by user_id."""
        pass
