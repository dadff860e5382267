"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from discuss.domain.model import Comment, MuteRecord, Post, User, Vote
from discuss.domain.value import (
    AuthorityTier,
    CommentId,
    CommunityId,
    PostId,
    UserId,
    VoteId,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def _optional_uuid(value: Any) -> Optional[UUID]:
    return None if value is None else _uuid(value)


def _optional_tier(value: Optional[str]) -> Optional[AuthorityTier]:
    return None if value is None else AuthorityTier(value)


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        username=row["username"],
        is_admin=row["is_admin"],
        points=row["points"],
        comment_count=row["comment_count"],
        created_at=row["created_at"],
        deleted_at=row.get("deleted_at"),
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict."""
    return user.model_dump()


def row_to_post(row: Dict[str, Any]) -> Post:
    """Convert database row to Post domain model.

    Args:
        row: Database row as dict

    Returns:
        Post domain model
    """
    return Post(
        id=PostId(_uuid(row["id"])),
        public_id=row["public_id"],
        title=row["title"],
        author_id=UserId(_uuid(row["author_id"])),
        community_id=CommunityId(_uuid(row["community_id"])),
        community_name=row["community_name"],
        comment_count=row["comment_count"],
        created_at=row["created_at"],
        last_activity_at=row["last_activity_at"],
        locked_at=row.get("locked_at"),
        deleted_at=row.get("deleted_at"),
        deleted_as=_optional_tier(row.get("deleted_as")),
    )


def post_to_dict(post: Post) -> Dict[str, Any]:
    """Convert Post domain model to database dict."""
    return post.model_dump() | {
        "deleted_as": post.deleted_as.value if post.deleted_as else None
    }


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    The viewer columns (``viewer_voted``, ``viewer_voted_up``) are only
    present when the query joined the viewer's vote. ``post_deleted`` and
    ``post_deleted_as`` come from the joined post row.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model (unredacted)
    """
    return Comment(
        id=CommentId(_uuid(row["id"])),
        post_id=PostId(_uuid(row["post_id"])),
        community_id=CommunityId(_uuid(row["community_id"])),
        author_id=UserId(_uuid(row["author_id"])),
        author_username=row["author_username"],
        author_deleted=row.get("author_deleted", False),
        posted_as=AuthorityTier(row["posted_as"]),
        parent_id=_optional_uuid(row.get("parent_id")),
        depth=row["depth"],
        ancestors=[CommentId(_uuid(a)) for a in row.get("ancestors") or []],
        body=row["body"],
        post_public_id=row["post_public_id"],
        post_title=row["post_title"],
        community_name=row["community_name"],
        reply_count=row["reply_count"],
        direct_reply_count=row["direct_reply_count"],
        upvotes=row["upvotes"],
        downvotes=row["downvotes"],
        points=row["points"],
        created_at=row["created_at"],
        edited_at=row.get("edited_at"),
        deleted_at=row.get("deleted_at"),
        deleted_by=_optional_uuid(row.get("deleted_by")),
        deleted_as=_optional_tier(row.get("deleted_as")),
        viewer_voted=row.get("viewer_voted"),
        viewer_voted_up=row.get("viewer_voted_up"),
        post_deleted=bool(row.get("post_deleted")),
        post_deleted_as=_optional_tier(row.get("post_deleted_as")),
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict.

    Only persisted columns are kept; the viewer projection is dropped.
    """
    return comment.model_dump(
        mode="python",
        exclude={
            "author",
            "is_author_muted",
            "viewer_voted",
            "viewer_voted_up",
            "post_deleted",
            "post_deleted_as",
        },
    ) | {
        "posted_as": comment.posted_as.value if comment.posted_as else None,
        "deleted_as": comment.deleted_as.value if comment.deleted_as else None,
    }


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model.

    Args:
        row: Database row as dict

    Returns:
        Vote domain model
    """
    return Vote(
        id=VoteId(_uuid(row["id"])),
        comment_id=CommentId(_uuid(row["comment_id"])),
        user_id=UserId(_uuid(row["user_id"])),
        up=row["up"],
        created_at=row["created_at"],
    )


def vote_to_dict(vote: Vote) -> Dict[str, Any]:
    """Convert Vote domain model to database dict."""
    return vote.model_dump()


def row_to_mute(row: Dict[str, Any]) -> MuteRecord:
    """Convert database row to MuteRecord domain model."""
    return MuteRecord(
        user_id=UserId(_uuid(row["user_id"])),
        muted_user_id=UserId(_uuid(row["muted_user_id"])),
        created_at=row["created_at"],
    )
