"""Unit tests for the edit, delete and change-user-group use cases."""

from uuid import uuid4

import pytest

from discuss.application.usecase.comment import (
    ChangeUserGroupRequest,
    ChangeUserGroupUseCase,
    DeleteCommentRequest,
    DeleteCommentUseCase,
    EditCommentRequest,
    EditCommentUseCase,
)
from discuss.domain.error import (
    ContentDeletedException,
    InvalidAuthorityError,
    NotAdminError,
    NotAuthorError,
    NotFoundError,
)
from discuss.domain.model.comment import DELETED_BODY, HIDDEN_USERNAME
from discuss.domain.repository import PostRepository, UserRepository
from discuss.domain.service import CommentService
from discuss.domain.value import AuthorityTier
from tests.conftest import make_post, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def _seed(env, is_admin: bool = False):
    """Seed an author and one comment by them."""
    comment_service = await env.get(CommentService)
    user_repo = await env.get(UserRepository)
    post_repo = await env.get(PostRepository)

    author = await user_repo.save(make_user(is_admin=is_admin))
    post = await post_repo.save(make_post(author.id))
    comment = await comment_service.add_comment(post, author, "original")
    return author, comment


class TestEditCommentUseCase:
    """Tests for EditCommentUseCase."""

    @pytest.mark.asyncio
    async def test_author_edits(self, unit_env):
        # Arrange
        use_case = await unit_env.get(EditCommentUseCase)
        author, comment = await _seed(unit_env)

        # Act
        response = await use_case.execute(
            EditCommentRequest(
                comment_id=str(comment.id), editor_id=str(author.id), body="edited"
            )
        )

        # Assert
        assert response.comment.body == "edited"
        assert response.comment.edited_at is not None

    @pytest.mark.asyncio
    async def test_other_user_cannot_edit(self, unit_env):
        use_case = await unit_env.get(EditCommentUseCase)
        _, comment = await _seed(unit_env)

        with pytest.raises(NotAuthorError):
            await use_case.execute(
                EditCommentRequest(
                    comment_id=str(comment.id), editor_id=str(uuid4()), body="x"
                )
            )

    @pytest.mark.asyncio
    async def test_unknown_comment(self, unit_env):
        use_case = await unit_env.get(EditCommentUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                EditCommentRequest(
                    comment_id=str(uuid4()), editor_id=str(uuid4()), body="x"
                )
            )


class TestDeleteCommentUseCase:
    """Tests for DeleteCommentUseCase."""

    @pytest.mark.asyncio
    async def test_delete_returns_redacted_comment(self, unit_env):
        """The response never exposes the deleted body or author."""
        # Arrange
        use_case = await unit_env.get(DeleteCommentUseCase)
        author, comment = await _seed(unit_env)

        # Act
        response = await use_case.execute(
            DeleteCommentRequest(comment_id=str(comment.id), actor_id=str(author.id))
        )

        # Assert
        assert response.comment.body == DELETED_BODY
        assert response.comment.author_id is None
        assert response.comment.author is None
        assert response.comment.author_username == HIDDEN_USERNAME
        assert response.comment.posted_as is None
        assert response.comment.deleted_as == AuthorityTier.SELF
        assert response.comment.deleted_at is not None

    @pytest.mark.asyncio
    async def test_edit_after_delete_rejected(self, unit_env):
        """Deleted comments cannot be edited back to life."""
        # Arrange
        delete = await unit_env.get(DeleteCommentUseCase)
        edit = await unit_env.get(EditCommentUseCase)
        author, comment = await _seed(unit_env)
        await delete.execute(
            DeleteCommentRequest(comment_id=str(comment.id), actor_id=str(author.id))
        )

        # Act & Assert
        with pytest.raises(ContentDeletedException):
            await edit.execute(
                EditCommentRequest(
                    comment_id=str(comment.id), editor_id=str(author.id), body="back"
                )
            )

    @pytest.mark.asyncio
    async def test_admin_deletes_as_admin(self, unit_env):
        # Arrange
        use_case = await unit_env.get(DeleteCommentUseCase)
        user_repo = await unit_env.get(UserRepository)
        _, comment = await _seed(unit_env)
        admin = await user_repo.save(make_user("admin", is_admin=True))

        # Act
        response = await use_case.execute(
            DeleteCommentRequest(
                comment_id=str(comment.id), actor_id=str(admin.id), tier="admin"
            )
        )

        # Assert
        assert response.comment.deleted_as == AuthorityTier.ADMIN

    @pytest.mark.asyncio
    async def test_unknown_tier(self, unit_env):
        use_case = await unit_env.get(DeleteCommentUseCase)
        author, comment = await _seed(unit_env)

        with pytest.raises(InvalidAuthorityError):
            await use_case.execute(
                DeleteCommentRequest(
                    comment_id=str(comment.id), actor_id=str(author.id), tier="god"
                )
            )


class TestChangeUserGroupUseCase:
    """Tests for ChangeUserGroupUseCase."""

    @pytest.mark.asyncio
    async def test_admin_author_posts_as_admin(self, unit_env):
        use_case = await unit_env.get(ChangeUserGroupUseCase)
        author, comment = await _seed(unit_env, is_admin=True)

        response = await use_case.execute(
            ChangeUserGroupRequest(
                comment_id=str(comment.id), author_id=str(author.id), tier="admin"
            )
        )

        assert response.comment.posted_as == AuthorityTier.ADMIN

    @pytest.mark.asyncio
    async def test_non_admin_cannot_post_as_admin(self, unit_env):
        use_case = await unit_env.get(ChangeUserGroupUseCase)
        author, comment = await _seed(unit_env)

        with pytest.raises(NotAdminError):
            await use_case.execute(
                ChangeUserGroupRequest(
                    comment_id=str(comment.id), author_id=str(author.id), tier="admin"
                )
            )
