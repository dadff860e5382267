"""Unit tests for GetCommentUseCase and GetCommentsUseCase."""

from uuid import uuid4

import pytest

from discuss.application.usecase.comment import (
    GetCommentRequest,
    GetCommentsRequest,
    GetCommentsUseCase,
    GetCommentUseCase,
)
from discuss.domain.error import NotFoundError, ValidationError
from discuss.domain.model.common import utcnow
from discuss.domain.repository import PostRepository, UserRepository
from discuss.domain.service import CommentService
from discuss.domain.value import AuthorityTier
from tests.conftest import make_post, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def _thread(env):
    """Seed a post with root -> child -> grandchild and a second root."""
    comment_service = await env.get(CommentService)
    user_repo = await env.get(UserRepository)
    post_repo = await env.get(PostRepository)

    author = await user_repo.save(make_user())
    post = await post_repo.save(make_post(author.id))
    root = await comment_service.add_comment(post, author, "root")
    child = await comment_service.add_comment(post, author, "child", root.id)
    grandchild = await comment_service.add_comment(
        post, author, "grandchild", child.id
    )
    other = await comment_service.add_comment(post, author, "other root")
    return post, root, child, grandchild, other


class TestGetCommentUseCase:
    """Tests for GetCommentUseCase."""

    @pytest.mark.asyncio
    async def test_get_comment(self, unit_env):
        use_case = await unit_env.get(GetCommentUseCase)
        _, root, _, _, _ = await _thread(unit_env)

        response = await use_case.execute(GetCommentRequest(comment_id=str(root.id)))

        assert response.comment.comment_id == str(root.id)
        assert response.comment.reply_count == 2
        assert response.comment.direct_reply_count == 1
        assert response.comment.viewer_voted is None

    @pytest.mark.asyncio
    async def test_post_and_author_state_in_response(self, unit_env):
        # Arrange
        use_case = await unit_env.get(GetCommentUseCase)
        post_repo = await unit_env.get(PostRepository)
        post, root, _, _, _ = await _thread(unit_env)
        await post_repo.save(
            post.model_copy(
                update={"deleted_at": utcnow(), "deleted_as": AuthorityTier.ADMIN}
            )
        )

        # Act
        response = await use_case.execute(GetCommentRequest(comment_id=str(root.id)))

        # Assert
        assert response.comment.post_deleted is True
        assert response.comment.post_deleted_as == AuthorityTier.ADMIN
        assert response.comment.author_deleted is False
        assert response.comment.body == "root"

    @pytest.mark.asyncio
    async def test_unknown_comment(self, unit_env):
        use_case = await unit_env.get(GetCommentUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(GetCommentRequest(comment_id=str(uuid4())))

    @pytest.mark.asyncio
    async def test_malformed_viewer(self, unit_env):
        use_case = await unit_env.get(GetCommentUseCase)

        with pytest.raises(ValidationError):
            await use_case.execute(
                GetCommentRequest(comment_id=str(uuid4()), viewer_id="me")
            )


class TestGetCommentsUseCase:
    """Tests for GetCommentsUseCase."""

    @pytest.mark.asyncio
    async def test_whole_post_oldest_first(self, unit_env):
        # Arrange
        use_case = await unit_env.get(GetCommentsUseCase)
        post, root, child, grandchild, other = await _thread(unit_env)

        # Act
        response = await use_case.execute(GetCommentsRequest(post_id=str(post.id)))

        # Assert
        assert response.total == 4
        assert {c.comment_id for c in response.comments} == {
            str(root.id),
            str(child.id),
            str(grandchild.id),
            str(other.id),
        }
        created = [c.created_at for c in response.comments]
        assert created == sorted(created)

    @pytest.mark.asyncio
    async def test_subtree(self, unit_env):
        """descendants_of returns every comment below, not just children."""
        use_case = await unit_env.get(GetCommentsUseCase)
        _, root, child, grandchild, _ = await _thread(unit_env)

        response = await use_case.execute(
            GetCommentsRequest(descendants_of=str(root.id))
        )

        assert {c.comment_id for c in response.comments} == {
            str(child.id),
            str(grandchild.id),
        }

    @pytest.mark.asyncio
    async def test_top_level_only(self, unit_env):
        use_case = await unit_env.get(GetCommentsUseCase)
        post, root, _, _, other = await _thread(unit_env)

        response = await use_case.execute(
            GetCommentsRequest(post_id=str(post.id), top_level_only=True)
        )

        assert {c.comment_id for c in response.comments} == {
            str(root.id),
            str(other.id),
        }
        assert all(c.depth == 0 for c in response.comments)

    @pytest.mark.asyncio
    async def test_pagination(self, unit_env):
        use_case = await unit_env.get(GetCommentsUseCase)
        post, *_ = await _thread(unit_env)

        first = await use_case.execute(
            GetCommentsRequest(post_id=str(post.id), limit=3)
        )
        rest = await use_case.execute(
            GetCommentsRequest(post_id=str(post.id), limit=3, offset=3)
        )

        assert first.total == 3
        assert rest.total == 1
        assert not {c.comment_id for c in first.comments} & {
            c.comment_id for c in rest.comments
        }

    @pytest.mark.asyncio
    async def test_no_matches(self, unit_env):
        use_case = await unit_env.get(GetCommentsUseCase)

        response = await use_case.execute(GetCommentsRequest(post_id=str(uuid4())))

        assert response.comments == []
        assert response.total == 0

    @pytest.mark.asyncio
    async def test_contradictory_criteria(self, unit_env):
        """top_level_only with parent_id is a validation error."""
        use_case = await unit_env.get(GetCommentsUseCase)

        with pytest.raises(ValidationError):
            await use_case.execute(
                GetCommentsRequest(top_level_only=True, parent_id=str(uuid4()))
            )
