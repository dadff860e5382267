"""Application layer DI providers."""

from dishka import Scope, provide

from discuss.application.usecase.comment import (
    AddCommentUseCase,
    ChangeUserGroupUseCase,
    DeleteCommentUseCase,
    EditCommentUseCase,
    GetCommentsUseCase,
    GetCommentUseCase,
)
from discuss.application.usecase.vote import (
    CastVoteUseCase,
    ChangeVoteUseCase,
    RemoveVoteUseCase,
)
from discuss.domain.service import (
    CommentService,
    PostService,
    UserService,
    VoteService,
)
from discuss.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_add_comment_use_case(
        self,
        comment_service: CommentService,
        post_service: PostService,
        user_service: UserService,
    ) -> AddCommentUseCase:
        """Provide add comment use case."""
        return AddCommentUseCase(
            comment_service=comment_service,
            post_service=post_service,
            user_service=user_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_get_comment_use_case(
        self, comment_service: CommentService
    ) -> GetCommentUseCase:
        """Provide get comment use case."""
        return GetCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_get_comments_use_case(
        self, comment_service: CommentService
    ) -> GetCommentsUseCase:
        """Provide get comments use case."""
        return GetCommentsUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_edit_comment_use_case(
        self, comment_service: CommentService
    ) -> EditCommentUseCase:
        """Provide edit comment use case."""
        return EditCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self, comment_service: CommentService
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_change_user_group_use_case(
        self, comment_service: CommentService
    ) -> ChangeUserGroupUseCase:
        """Provide change user group use case."""
        return ChangeUserGroupUseCase(comment_service=comment_service)

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_cast_vote_use_case(
        self, vote_service: VoteService, comment_service: CommentService
    ) -> CastVoteUseCase:
        """Provide cast vote use case."""
        return CastVoteUseCase(
            vote_service=vote_service, comment_service=comment_service
        )

    @provide(scope=Scope.REQUEST)
    def get_change_vote_use_case(
        self, vote_service: VoteService, comment_service: CommentService
    ) -> ChangeVoteUseCase:
        """Provide change vote use case."""
        return ChangeVoteUseCase(
            vote_service=vote_service, comment_service=comment_service
        )

    @provide(scope=Scope.REQUEST)
    def get_remove_vote_use_case(
        self, vote_service: VoteService, comment_service: CommentService
    ) -> RemoveVoteUseCase:
        """Provide remove vote use case."""
        return RemoveVoteUseCase(
            vote_service=vote_service, comment_service=comment_service
        )
