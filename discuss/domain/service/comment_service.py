"""Comment domain service."""

from uuid import uuid4

import logfire

from discuss.config import CommentSettings
from discuss.domain.error import (
    ContentDeletedException,
    InvalidParentError,
    InvariantViolationError,
    MaxDepthReachedError,
    NotAuthorError,
    NotFoundError,
    PostLockedError,
    ReplyToDeletedError,
)
from discuss.domain.model.comment import Comment
from discuss.domain.model.common import utcnow
from discuss.domain.model.post import Post
from discuss.domain.model.user import User
from discuss.domain.repository import (
    CommentRepository,
    MuteRepository,
    PostRepository,
    ReportRepository,
    TransactionManager,
    UserRepository,
)
from discuss.domain.value import (
    AuthorityTier,
    CommentFilter,
    CommentId,
    UserId,
)

from .authority_service import AuthorityService, parse_authority_tier
from .base import Service
from .notification_service import NotificationDispatcher


class CommentService(Service):
    """Domain service for comment operations.

    Owns the comment tree: placement and fan-out on create, the viewer
    projection on read, and guarded edit/delete/tier changes.
    """

    def __init__(
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
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            post_repository: Post repository (lock state, comment counter)
            user_repository: User repository (authors, comment counter)
            mute_repository: Mute list lookups for the viewer projection
            report_repository: Moderation reports cleared on delete
            transactions: Transaction manager shared with the repositories
            authority_service: Tier checks for delete and tier changes
            notifications: Dispatcher for post-commit notifications
            settings: Tree depth and body length limits
        """
        self.comment_repository = comment_repository
        self.post_repository = post_repository
        self.user_repository = user_repository
        self.mute_repository = mute_repository
        self.report_repository = report_repository
        self.transactions = transactions
        self.authority_service = authority_service
        self.notifications = notifications
        self.settings = settings

    async def add_comment(
        self,
        post: Post,
        author: User,
        text: str,
        parent_id: CommentId | None = None,
    ) -> Comment:
        """Create a comment on a post or reply to another comment.

        The insert and every counter it touches (post, parent, ancestors,
        author) commit together. Notifications are scheduled after commit.

        Args:
            post: Post being commented on
            author: Commenting user
            text: Comment body, truncated to the configured limit
            parent_id: Parent comment ID for replies (None for top-level)

        Returns:
            The persisted comment, re-read with its author populated

        Raises:
            ContentDeletedException: If the post is deleted
            PostLockedError: If the post is locked
            NotFoundError: If the parent does not exist
            InvalidParentError: If the parent belongs to another post
            ReplyToDeletedError: If the parent is deleted
            MaxDepthReachedError: If the parent is already at maximum depth
        """
        with logfire.span(
            "comment_service.add_comment",
            post_id=str(post.id),
            author_id=str(author.id),
            parent_id=str(parent_id) if parent_id else None,
        ):
            if post.is_deleted:
                raise ContentDeletedException("post", str(post.id))
            if await self.post_repository.is_locked(post.id):
                logfire.warn("Comment rejected on locked post", post_id=str(post.id))
                raise PostLockedError(str(post.id))

            parent = None
            ancestors: list[CommentId] = []
            depth = 0
            if parent_id is not None:
                parent = await self.comment_repository.find_by_id(parent_id)
                if parent is None:
                    raise NotFoundError("Comment", str(parent_id))
                if parent.post_id != post.id:
                    logfire.warn(
                        "Parent comment does not belong to post",
                        parent_id=str(parent_id),
                        parent_post_id=str(parent.post_id),
                        target_post_id=str(post.id),
                    )
                    raise InvalidParentError(str(parent_id), str(post.id))
                if parent.is_deleted:
                    raise ReplyToDeletedError(str(parent_id))
                if parent.depth >= self.settings.max_depth:
                    raise MaxDepthReachedError(str(parent_id), self.settings.max_depth)
                ancestors = parent.child_path()
                depth = parent.depth + 1

            now = utcnow()
            comment = Comment(
                id=CommentId(uuid4()),
                post_id=post.id,
                community_id=post.community_id,
                author_id=author.id,
                author_username=author.username,
                posted_as=AuthorityTier.SELF,
                parent_id=parent_id,
                depth=depth,
                ancestors=ancestors,
                body=self._truncate(text),
                post_public_id=post.public_id,
                post_title=post.title,
                community_name=post.community_name,
                created_at=now,
            )

            async with self.transactions.transaction():
                await self.comment_repository.insert(comment)
                await self.post_repository.record_comment(post.id, now)
                if parent is not None:
                    # Parent may have been deleted since it was read
                    if not await self.comment_repository.increment_direct_replies(
                        parent.id
                    ):
                        raise ReplyToDeletedError(str(parent.id))
                    await self.comment_repository.increment_replies(ancestors)
                    await self.comment_repository.add_reply_edges(ancestors, comment.id)
                await self.comment_repository.index_activity(author.id, comment.id)
                await self.user_repository.adjust_comment_count(author.id, 1)

            logfire.info(
                "Comment created",
                comment_id=str(comment.id),
                post_id=str(post.id),
                depth=depth,
                body_length=len(comment.body),
            )

            self.notifications.comment_added(post, comment, parent)
            return await self.get_comment(comment.id)

    async def get_comment(
        self, comment_id: CommentId, viewer_id: UserId | None = None
    ) -> Comment:
        """Get a single comment as seen by the viewer.

        Raises:
            NotFoundError: If the comment does not exist
        """
        with logfire.span(
            "comment_service.get_comment",
            comment_id=str(comment_id),
            viewer_id=str(viewer_id) if viewer_id else None,
        ):
            comment = await self.comment_repository.find_by_id(comment_id, viewer_id)
            if comment is None:
                logfire.warn("Comment not found", comment_id=str(comment_id))
                raise NotFoundError("Comment", str(comment_id))
            [prepared] = await self._prepare([comment], viewer_id)
            return prepared

    async def get_comments(
        self, comment_filter: CommentFilter, viewer_id: UserId | None = None
    ) -> list[Comment]:
        """Get comments matching a filter, oldest first.

        Returns:
            Comments with muted authors flagged, authors populated and
            deleted comments redacted. Empty when nothing matches.
        """
        with logfire.span(
            "comment_service.get_comments",
            post_id=str(comment_filter.post_id) if comment_filter.post_id else None,
            viewer_id=str(viewer_id) if viewer_id else None,
        ):
            comments = await self.comment_repository.find(comment_filter, viewer_id)
            if not comments:
                return []
            prepared = await self._prepare(comments, viewer_id)
            logfire.info("Comments retrieved", count=len(prepared))
            return prepared

    async def save_comment(
        self, comment: Comment, editor_id: UserId, text: str
    ) -> Comment:
        """Replace the body of a comment.

        Only the author may edit, and only while the comment is active.

        Raises:
            ContentDeletedException: If the comment is (or becomes) deleted
            NotAuthorError: If the editor is not the author
        """
        with logfire.span(
            "comment_service.save_comment",
            comment_id=str(comment.id),
            editor_id=str(editor_id),
        ):
            if comment.is_deleted:
                raise ContentDeletedException("comment", str(comment.id))
            if comment.author_id != editor_id:
                raise NotAuthorError("comment", str(comment.id), str(editor_id))

            body = self._truncate(text)
            edited_at = utcnow()
            async with self.transactions.transaction():
                updated = await self.comment_repository.update_body(
                    comment.id, body, edited_at
                )
            if not updated:
                logfire.warn("Comment deleted before edit", comment_id=str(comment.id))
                raise ContentDeletedException("comment", str(comment.id))

            logfire.info(
                "Comment edited", comment_id=str(comment.id), body_length=len(body)
            )
            return comment.model_copy(update={"body": body, "edited_at": edited_at})

    async def delete_comment(
        self,
        comment: Comment,
        actor_id: UserId,
        tier: AuthorityTier | str,
    ) -> Comment:
        """Soft delete a comment under the given authority tier.

        The comment keeps its place in the tree; its author loses the comment
        from their profile activity and comment counter. Pending reports on
        the comment are removed afterwards on a best-effort basis.

        Returns:
            The redacted comment

        Raises:
            ContentDeletedException: If the comment is already deleted
            InvalidAuthorityError: If the tier is not recognized
            NotAuthorError / NotModeratorError / NotAdminError: If the actor
                does not hold the tier
        """
        with logfire.span(
            "comment_service.delete_comment",
            comment_id=str(comment.id),
            actor_id=str(actor_id),
            tier=str(tier),
        ):
            if comment.is_deleted:
                raise ContentDeletedException("comment", str(comment.id))

            tier = await self.authority_service.require(
                tier,
                actor_id,
                comment.author_id,
                comment.community_id,
                resource="comment",
                resource_id=str(comment.id),
            )

            deleted_at = utcnow()
            async with self.transactions.transaction():
                marked = await self.comment_repository.mark_deleted(
                    comment.id, deleted_at, actor_id, tier
                )
                if not marked:
                    raise ContentDeletedException("comment", str(comment.id))
                if comment.author_id is not None:
                    await self.comment_repository.unindex_activity(
                        comment.author_id, comment.id
                    )
                    await self.user_repository.adjust_comment_count(
                        comment.author_id, -1
                    )

            logfire.info(
                "Comment deleted",
                comment_id=str(comment.id),
                deleted_by=str(actor_id),
                deleted_as=tier.value,
            )

            await self._remove_reports(comment.id)

            deleted = comment.model_copy(
                update={
                    "body": "",
                    "deleted_at": deleted_at,
                    "deleted_by": actor_id,
                    "deleted_as": tier,
                }
            )
            return deleted.redacted()

    async def change_user_group(
        self,
        comment: Comment,
        author_id: UserId,
        tier: AuthorityTier | str,
    ) -> Comment:
        """Change the tier a comment is presented under.

        Only the author may change it, and only to a tier they hold.
        Choosing the current tier is a no-op.

        Raises:
            ContentDeletedException: If the comment is (or becomes) deleted
            NotFoundError: If the comment no longer exists
            NotAuthorError: If the caller is not the author
            InvalidAuthorityError: If the tier is not recognized
            NotModeratorError / NotAdminError: If the author does not hold
                the tier
        """
        with logfire.span(
            "comment_service.change_user_group",
            comment_id=str(comment.id),
            author_id=str(author_id),
            tier=str(tier),
        ):
            if comment.is_deleted:
                raise ContentDeletedException("comment", str(comment.id))
            if comment.author_id != author_id:
                raise NotAuthorError("comment", str(comment.id), str(author_id))

            tier = parse_authority_tier(tier)

            # The caller's copy may predate a delete
            current = await self.comment_repository.find_by_id(comment.id)
            if current is None:
                raise NotFoundError("Comment", str(comment.id))
            if current.is_deleted:
                raise ContentDeletedException("comment", str(comment.id))

            if current.posted_as == tier:
                return comment

            await self.authority_service.require(
                tier,
                author_id,
                comment.author_id,
                comment.community_id,
                resource="comment",
                resource_id=str(comment.id),
            )

            async with self.transactions.transaction():
                updated = await self.comment_repository.update_posted_as(
                    comment.id, tier
                )
            if not updated:
                raise ContentDeletedException("comment", str(comment.id))

            logfire.info(
                "Comment tier changed",
                comment_id=str(comment.id),
                posted_as=tier.value,
            )
            return comment.model_copy(update={"posted_as": tier})

    async def _prepare(
        self, comments: list[Comment], viewer_id: UserId | None
    ) -> list[Comment]:
        """Apply the viewer projection: mute flags, authors, redaction."""
        if viewer_id is not None:
            comments = await self._flag_muted_authors(comments, viewer_id)
        comments = await self._populate_authors(comments)
        return [comment.redacted() for comment in comments]

    async def _flag_muted_authors(
        self, comments: list[Comment], viewer_id: UserId
    ) -> list[Comment]:
        mutes = await self.mute_repository.find_muted_users(viewer_id)
        if not mutes:
            return comments

        muted = {mute.muted_user_id for mute in mutes}
        # Deleted comments are skipped; redaction already hides their author
        return [
            comment.model_copy(update={"is_author_muted": True})
            if not comment.is_deleted and comment.author_id in muted
            else comment
            for comment in comments
        ]

    async def _populate_authors(self, comments: list[Comment]) -> list[Comment]:
        # Deleted comments are redacted, so their authors are never loaded
        author_ids = list(
            dict.fromkeys(
                comment.author_id
                for comment in comments
                if not comment.is_deleted and comment.author_id is not None
            )
        )
        if not author_ids:
            return comments

        users = await self.user_repository.find_by_ids(author_ids)
        authors = {user.id: user for user in users}

        populated = []
        for comment in comments:
            if comment.is_deleted:
                populated.append(comment)
                continue
            author = authors.get(comment.author_id)
            if author is None:
                logfire.error(
                    "Comment author missing",
                    comment_id=str(comment.id),
                    author_id=str(comment.author_id),
                )
                raise InvariantViolationError(
                    f"Author {comment.author_id} of comment {comment.id} does not exist"
                )
            populated.append(comment.model_copy(update={"author": author}))
        return populated

    async def _remove_reports(self, comment_id: CommentId) -> None:
        try:
            async with self.transactions.transaction():
                removed = await self.report_repository.remove_for_comment(comment_id)
        except Exception as e:
            logfire.error(
                "Failed to remove reports for deleted comment",
                comment_id=str(comment_id),
                error=str(e),
                error_type=type(e).__name__,
            )
            return

        if removed:
            logfire.info(
                "Reports removed for deleted comment",
                comment_id=str(comment_id),
                count=removed,
            )

    def _truncate(self, text: str) -> str:
        return text[: self.settings.max_body_length]
