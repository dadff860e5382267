"""User lookups for comment use cases."""

import logfire

from discuss.domain.error import NotFoundError
from discuss.domain.model import User
from discuss.domain.repository import UserRepository
from discuss.domain.value import UserId

from .base import Service


class UserService(Service):
    """Resolves acting users by id."""

    def __init__(self, user_repository: UserRepository) -> None:
        self.user_repository = user_repository

    async def get_by_id(self, user_id: UserId) -> User:
        """Load an author or voter.

        Raises:
            NotFoundError: The id names no user
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if user is None:
                logfire.warn("Unknown user", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            return user
