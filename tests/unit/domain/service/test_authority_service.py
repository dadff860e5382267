"""Unit tests for AuthorityService."""

from uuid import uuid4

import pytest

from discuss.domain.error import (
    InvalidAuthorityError,
    NotAdminError,
    NotAuthorError,
    NotFoundError,
    NotModeratorError,
)
from discuss.domain.repository import UserRepository
from discuss.domain.service import AuthorityService, parse_authority_tier
from discuss.domain.value import AuthorityTier, CommunityId, UserId
from tests.conftest import make_user
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()


class TestParseAuthorityTier:
    """Tests for tier label parsing."""

    @pytest.mark.parametrize(
        "label, tier",
        [
            ("self", AuthorityTier.SELF),
            ("moderator", AuthorityTier.MODERATOR),
            ("admin", AuthorityTier.ADMIN),
            (AuthorityTier.ADMIN, AuthorityTier.ADMIN),
        ],
    )
    def test_known_labels(self, label, tier):
        assert parse_authority_tier(label) is tier

    @pytest.mark.parametrize("label", ["", "owner", "ADMIN", "root"])
    def test_unknown_labels_rejected(self, label):
        with pytest.raises(InvalidAuthorityError) as exc_info:
            parse_authority_tier(label)
        assert exc_info.value.code == "invalid-authority"


class TestHasAuthority:
    """Each tier is checked against live state."""

    @pytest.mark.asyncio
    async def test_self_tier_requires_ownership(self, unit_env):
        """Only the owner holds the self tier."""
        authority = await unit_env.get(AuthorityService)
        owner_id = UserId(uuid4())
        community_id = CommunityId(uuid4())

        assert await authority.has_authority("self", owner_id, owner_id, community_id)
        assert not await authority.has_authority(
            "self", UserId(uuid4()), owner_id, community_id
        )

    @pytest.mark.asyncio
    async def test_self_tier_denied_without_owner(self, unit_env):
        """Content with no recorded owner cannot be acted on as self."""
        authority = await unit_env.get(AuthorityService)

        assert not await authority.has_authority(
            "self", UserId(uuid4()), None, CommunityId(uuid4())
        )

    @pytest.mark.asyncio
    async def test_moderator_tier_is_per_community(self, unit_env):
        """Moderating one community grants nothing in another."""
        # Arrange
        authority = await unit_env.get(AuthorityService)
        user_repo = await unit_env.get(UserRepository)
        mod = await user_repo.save(make_user("mod"))
        moderated = CommunityId(uuid4())
        elsewhere = CommunityId(uuid4())
        await user_repo.add_moderator(moderated, mod.id)
        owner_id = UserId(uuid4())

        # Act & Assert
        assert await authority.has_authority("moderator", mod.id, owner_id, moderated)
        assert not await authority.has_authority(
            "moderator", mod.id, owner_id, elsewhere
        )

    @pytest.mark.asyncio
    async def test_admin_tier_follows_admin_flag(self, unit_env):
        """Site admins hold the admin tier everywhere."""
        # Arrange
        authority = await unit_env.get(AuthorityService)
        user_repo = await unit_env.get(UserRepository)
        admin = await user_repo.save(make_user("admin", is_admin=True))
        regular = await user_repo.save(make_user("regular"))
        owner_id = UserId(uuid4())
        community_id = CommunityId(uuid4())

        # Act & Assert
        assert await authority.has_authority("admin", admin.id, owner_id, community_id)
        assert not await authority.has_authority(
            "admin", regular.id, owner_id, community_id
        )

    @pytest.mark.asyncio
    async def test_owner_does_not_hold_higher_tiers(self, unit_env):
        """Ownership never implies moderator or admin authority."""
        authority = await unit_env.get(AuthorityService)
        user_repo = await unit_env.get(UserRepository)
        owner = await user_repo.save(make_user("owner"))
        community_id = CommunityId(uuid4())

        assert not await authority.has_authority(
            "moderator", owner.id, owner.id, community_id
        )
        assert not await authority.has_authority(
            "admin", owner.id, owner.id, community_id
        )

    @pytest.mark.asyncio
    async def test_admin_tier_unknown_actor(self, unit_env):
        """Claiming the admin tier as a nonexistent user fails loudly."""
        authority = await unit_env.get(AuthorityService)

        with pytest.raises(NotFoundError):
            await authority.has_authority(
                "admin", UserId(uuid4()), UserId(uuid4()), CommunityId(uuid4())
            )


class TestRequire:
    """require() raises a tier-specific error when authority is missing."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "tier, error",
        [
            ("self", NotAuthorError),
            ("moderator", NotModeratorError),
            ("admin", NotAdminError),
        ],
    )
    async def test_denial_error_per_tier(self, unit_env, tier, error):
        # Arrange
        authority = await unit_env.get(AuthorityService)
        user_repo = await unit_env.get(UserRepository)
        stranger = await user_repo.save(make_user("stranger"))

        # Act & Assert
        with pytest.raises(error) as exc_info:
            await authority.require(
                tier,
                stranger.id,
                UserId(uuid4()),
                CommunityId(uuid4()),
                resource="comment",
                resource_id="c1",
            )
        assert exc_info.value.resource == "comment"
        assert exc_info.value.resource_id == "c1"

    @pytest.mark.asyncio
    async def test_returns_parsed_tier(self, unit_env):
        authority = await unit_env.get(AuthorityService)
        owner_id = UserId(uuid4())

        tier = await authority.require(
            "self",
            owner_id,
            owner_id,
            CommunityId(uuid4()),
            resource="comment",
            resource_id="c1",
        )

        assert tier is AuthorityTier.SELF

    @pytest.mark.asyncio
    async def test_invalid_tier(self, unit_env):
        authority = await unit_env.get(AuthorityService)
        owner_id = UserId(uuid4())

        with pytest.raises(InvalidAuthorityError):
            await authority.require(
                "owner",
                owner_id,
                owner_id,
                CommunityId(uuid4()),
                resource="comment",
                resource_id="c1",
            )
