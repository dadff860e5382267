"""In-memory mute repository for testing."""

from discuss.domain.model.mute import MuteRecord
from discuss.domain.repository.mute import MuteRepository
from discuss.domain.value import UserId

from .database import InMemoryDatabase


class InMemoryMuteRepository(MuteRepository):
    """In-memory implementation of MuteRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database

    async def find_muted_users(self, user_id: UserId) -> list[MuteRecord]:
        """Find the users muted by user_id."""
        return [m for m in self.database.mutes if m.user_id == user_id]

    async def mute(self, user_id: UserId, muted_user_id: UserId) -> MuteRecord:
        """Record a mute (test seeding)."""
        record = MuteRecord(user_id=user_id, muted_user_id=muted_user_id)
        self.database.mutes.append(record)
        return record
