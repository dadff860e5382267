"""Domain layer DI providers."""

from dishka import Scope, provide

from discuss.config import CommentSettings
from discuss.domain.repository import (
    CommentRepository,
    MuteRepository,
    PostRepository,
    ReportRepository,
    TransactionManager,
    UserRepository,
    VoteRepository,
)
from discuss.domain.service import (
    AuthorityService,
    CommentService,
    NotificationDispatcher,
    PostService,
    UserService,
    VoteService,
)
from discuss.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each request gets fresh service instances sharing one transaction manager.
    """

    scope = Scope.REQUEST

    @provide
    def get_authority_service(self, user_repository: UserRepository) -> AuthorityService:
        """Provide authority domain service."""
        return AuthorityService(user_repository=user_repository)

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        post_repository: PostRepository,
        user_repository: UserRepository,
        mute_repository: MuteRepository,
        report_repository: ReportRepository,
        transactions: TransactionManager,
        authority_service: AuthorityService,
        notifications: NotificationDispatcher,
        settings: CommentSettings,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            post_repository=post_repository,
            user_repository=user_repository,
            mute_repository=mute_repository,
            report_repository=report_repository,
            transactions=transactions,
            authority_service=authority_service,
            notifications=notifications,
            settings=settings,
        )

    @provide
    def get_vote_service(
        self,
        vote_repository: VoteRepository,
        comment_repository: CommentRepository,
        post_repository: PostRepository,
        user_repository: UserRepository,
        transactions: TransactionManager,
        notifications: NotificationDispatcher,
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(
            vote_repository=vote_repository,
            comment_repository=comment_repository,
            post_repository=post_repository,
            user_repository=user_repository,
            transactions=transactions,
            notifications=notifications,
        )

    @provide
    def get_post_service(self, post_repository: PostRepository) -> PostService:
        """Provide post domain service."""
        return PostService(post_repository=post_repository)

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)
