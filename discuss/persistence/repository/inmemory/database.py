"""Shared state for the in-memory repositories."""

import copy
from dataclasses import dataclass, field, fields
from typing import Any

from discuss.domain.model import Comment, MuteRecord, Post, User, Vote
from discuss.domain.value import CommentId, CommunityId, PostId, UserId, VoteId


@dataclass
class InMemoryDatabase:
    """Tables backing the in-memory repositories.

    Repositories built over the same instance see each other's writes, and
    the in-memory transaction manager rolls all of them back together.
    """

    users: dict[UserId, User] = field(default_factory=dict)
    moderators: set[tuple[CommunityId, UserId]] = field(default_factory=set)
    posts: dict[PostId, Post] = field(default_factory=dict)
    comments: dict[CommentId, Comment] = field(default_factory=dict)
    votes: dict[VoteId, Vote] = field(default_factory=dict)
    # (ancestor, descendant)
    reply_edges: set[tuple[CommentId, CommentId]] = field(default_factory=set)
    # comment id -> author id
    activity: dict[CommentId, UserId] = field(default_factory=dict)
    mutes: list[MuteRecord] = field(default_factory=list)
    # (comment, reporter, reason)
    reports: list[tuple[CommentId, UserId, str]] = field(default_factory=list)

    def snapshot(self) -> dict[str, Any]:
        """Deep copy of every table."""
        return {f.name: copy.deepcopy(getattr(self, f.name)) for f in fields(self)}

    def restore(self, snapshot: dict[str, Any]) -> None:
        """Put every table back to a previous snapshot."""
        for name, value in snapshot.items():
            setattr(self, name, value)
