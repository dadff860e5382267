"""Response models shared by the comment and vote use cases."""

from datetime import datetime

from pydantic import BaseModel

from discuss.domain.model import Comment
from discuss.domain.value import AuthorityTier


class AuthorItem(BaseModel):
    """Author of a comment."""

    user_id: str
    username: str
    points: int


class CommentItem(BaseModel):
    """Comment as shown to a viewer.

    Deleted comments arrive redacted: no author, placeholder body.
    """

    comment_id: str
    post_id: str
    community_id: str
    post_public_id: str
    post_title: str
    community_name: str
    author_id: str | None
    author_username: str
    author_deleted: bool
    author: AuthorItem | None
    posted_as: AuthorityTier | None
    parent_id: str | None
    depth: int
    ancestors: list[str]
    body: str
    reply_count: int
    direct_reply_count: int
    upvotes: int
    downvotes: int
    points: int
    created_at: datetime
    edited_at: datetime | None
    deleted_at: datetime | None
    deleted_as: AuthorityTier | None
    post_deleted: bool
    post_deleted_as: AuthorityTier | None
    is_author_muted: bool
    viewer_voted: bool | None
    viewer_voted_up: bool | None

    @classmethod
    def from_comment(cls, comment: Comment) -> "CommentItem":
        author = (
            AuthorItem(
                user_id=str(comment.author.id),
                username=comment.author.username,
                points=comment.author.points,
            )
            if comment.author
            else None
        )
        return cls(
            comment_id=str(comment.id),
            post_id=str(comment.post_id),
            community_id=str(comment.community_id),
            post_public_id=comment.post_public_id,
            post_title=comment.post_title,
            community_name=comment.community_name,
            author_id=str(comment.author_id) if comment.author_id else None,
            author_username=comment.author_username,
            author_deleted=comment.author_deleted,
            author=author,
            posted_as=comment.posted_as,
            parent_id=str(comment.parent_id) if comment.parent_id else None,
            depth=comment.depth,
            ancestors=[str(a) for a in comment.ancestors],
            body=comment.body,
            reply_count=comment.reply_count,
            direct_reply_count=comment.direct_reply_count,
            upvotes=comment.upvotes,
            downvotes=comment.downvotes,
            points=comment.points,
            created_at=comment.created_at,
            edited_at=comment.edited_at,
            deleted_at=comment.deleted_at,
            deleted_as=comment.deleted_as,
            post_deleted=comment.post_deleted,
            post_deleted_as=comment.post_deleted_as,
            is_author_muted=comment.is_author_muted,
            viewer_voted=comment.viewer_voted,
            viewer_voted_up=comment.viewer_voted_up,
        )


class CommentResponse(BaseModel):
    """Single comment response."""

    comment: CommentItem
