"""Domain value objects for discuss.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

from enum import Enum

from pydantic import Field, model_validator

from discuss.domain.value.common import ValueObject
from discuss.domain.value.identifiers import CommentId, PostId, UserId


class AuthorityTier(str, Enum):
    """Capacity in which a privileged action is attempted.

    The tier is attached to the action, not to the actor: the same user may
    delete one comment as its author and another as a moderator.
    """

    SELF = "self"
    MODERATOR = "moderator"
    ADMIN = "admin"


class NotificationType(str, Enum):
    """Kinds of notification emitted by the comment engine."""

    COMMENT_REPLY = "comment_reply"
    NEW_COMMENT = "new_comment"
    NEW_VOTES = "new_votes"


class CommentFilter(ValueObject):
    """Filter for comment queries.

    All set criteria are combined with AND. Results are ordered by creation
    time, oldest first.
    """

    post_id: PostId | None = None
    author_id: UserId | None = None
    parent_id: CommentId | None = None
    top_level_only: bool = False
    # Whole subtree below a comment, resolved through reply edges
    descendants_of: CommentId | None = None
    ids: tuple[CommentId, ...] | None = None
    include_deleted: bool = True
    limit: int | None = Field(default=None, ge=1)
    offset: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def validate_parent_criteria(self) -> "CommentFilter":
        """Reject contradictory parent criteria."""
        if self.top_level_only and self.parent_id is not None:
            raise ValueError("top_level_only cannot be combined with parent_id")
        return self
