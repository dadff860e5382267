"""Authority domain service.

Answers whether an actor may perform a privileged action in a given tier.
Each tier is verified against live state; the caller only supplies the
tier label.
"""

import logfire

from discuss.domain.error import (
    InvalidAuthorityError,
    NotAdminError,
    NotAuthorError,
    NotAuthorizedError,
    NotFoundError,
    NotModeratorError,
)
from discuss.domain.repository import UserRepository
from discuss.domain.value import AuthorityTier, CommunityId, UserId

from .base import Service

_DENIED_ERRORS: dict[AuthorityTier, type[NotAuthorizedError]] = {
    AuthorityTier.SELF: NotAuthorError,
    AuthorityTier.MODERATOR: NotModeratorError,
    AuthorityTier.ADMIN: NotAdminError,
}


def parse_authority_tier(value: AuthorityTier | str) -> AuthorityTier:
    """Parse a tier label.

    Raises:
        InvalidAuthorityError: If value is not one of self/moderator/admin
    """
    try:
        return AuthorityTier(value)
    except ValueError:
        raise InvalidAuthorityError(value) from None


class AuthorityService(Service):
    """Domain service for the three-tier authority check."""

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize authority service.

        Args:
            user_repository: User repository (moderator and admin lookups)
        """
        self.user_repository = user_repository

    async def has_authority(
        self,
        tier: AuthorityTier | str,
        actor_id: UserId,
        owner_id: UserId | None,
        community_id: CommunityId,
    ) -> bool:
        """Check whether the actor holds the tier over the content.

        Args:
            tier: Tier the action is attempted under
            actor_id: User attempting the action
            owner_id: Author of the content
            community_id: Community the content lives in

        Returns:
            True if the actor holds the tier

        Raises:
            InvalidAuthorityError: If the tier is not recognized
            NotFoundError: If the admin tier is claimed by an unknown user
        """
        tier = parse_authority_tier(tier)

        if tier is AuthorityTier.SELF:
            return owner_id is not None and actor_id == owner_id

        if tier is AuthorityTier.MODERATOR:
            return await self.user_repository.is_moderator(community_id, actor_id)

        # AuthorityTier.ADMIN
        actor = await self.user_repository.find_by_id(actor_id)
        if actor is None:
            raise NotFoundError("User", str(actor_id))
        return actor.is_admin

    async def require(
        self,
        tier: AuthorityTier | str,
        actor_id: UserId,
        owner_id: UserId | None,
        community_id: CommunityId,
        resource: str,
        resource_id: str,
    ) -> AuthorityTier:
        """Require the actor to hold the tier over the content.

        Returns:
            The parsed tier

        Raises:
            NotAuthorError: self tier, actor is not the owner
            NotModeratorError: moderator tier, actor does not moderate the community
            NotAdminError: admin tier, actor is not a site admin
            InvalidAuthorityError: If the tier is not recognized
        """
        tier = parse_authority_tier(tier)
        with logfire.span(
            "authority_service.require",
            tier=tier.value,
            actor_id=str(actor_id),
            resource=resource,
            resource_id=resource_id,
        ):
            if await self.has_authority(tier, actor_id, owner_id, community_id):
                return tier

            logfire.warn(
                "Authority check failed",
                tier=tier.value,
                actor_id=str(actor_id),
                resource=resource,
                resource_id=resource_id,
            )
            raise _DENIED_ERRORS[tier](resource, resource_id, str(actor_id))
