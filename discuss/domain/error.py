"""Domain layer errors.

Every domain error carries a stable, machine-readable ``code`` so the
calling layer can map it to a transport status without parsing messages.
"""


class DomainError(Exception):
    """Base domain error."""

    code = "domain-error"

    def __init__(self, message: str, code: str | None = None):
        if code is not None:
            self.code = code
        super().__init__(message)


class ValidationError(DomainError):
    """Domain validation error."""

    code = "invalid-request"


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    code = "not-found"

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


# ============================================================================
# Invalid state
# ============================================================================


class BusinessRuleViolationError(DomainError):
    """Business rule violation error."""

    code = "invalid-state"


class ContentDeletedException(BusinessRuleViolationError):
    """Raised when attempting to act on deleted content."""

    def __init__(self, resource: str, resource_id: str):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(
            f"{resource.capitalize()} {resource_id} has been deleted",
            code=f"{resource}-deleted",
        )


class PostLockedError(BusinessRuleViolationError):
    """Raised when voting or commenting on a locked post."""

    code = "post-locked"

    def __init__(self, post_id: str):
        super().__init__(f"Post {post_id} is locked")


class ReplyToDeletedError(BusinessRuleViolationError):
    """Raised when replying to a deleted comment."""

    code = "comment-reply-to-deleted"

    def __init__(self, parent_id: str):
        super().__init__(f"Cannot reply to a deleted comment ({parent_id})")


class MaxDepthReachedError(BusinessRuleViolationError):
    """Raised when a reply would exceed the maximum tree depth."""

    code = "comment-max-depth-reached"

    def __init__(self, parent_id: str, max_depth: int):
        self.max_depth = max_depth
        super().__init__(
            f"Cannot reply to comment {parent_id}: maximum depth {max_depth} reached"
        )


class InvalidParentError(BusinessRuleViolationError):
    """Raised when a parent comment belongs to another post."""

    code = "comment-invalid-parent"

    def __init__(self, parent_id: str, post_id: str):
        super().__init__(f"Parent comment {parent_id} does not belong to post {post_id}")


# ============================================================================
# Authorization
# ============================================================================


class NotAuthorizedError(DomainError):
    """Raised when a user lacks the authority required for an action."""

    code = "not-authorized"

    def __init__(self, resource: str, resource_id: str, user_id: str, reason: str):
        self.resource = resource
        self.resource_id = resource_id
        self.user_id = user_id
        super().__init__(
            f"User {user_id} is not authorized to act on {resource} {resource_id}: {reason}"
        )


class NotAuthorError(NotAuthorizedError):
    """Actor is not the owner of the content."""

    code = "not-author"

    def __init__(self, resource: str, resource_id: str, user_id: str):
        super().__init__(resource, resource_id, user_id, "not the author")


class NotModeratorError(NotAuthorizedError):
    """Actor is not a moderator of the content's community."""

    code = "not-moderator"

    def __init__(self, resource: str, resource_id: str, user_id: str):
        super().__init__(resource, resource_id, user_id, "not a moderator")


class NotAdminError(NotAuthorizedError):
    """Actor is not a site administrator."""

    code = "not-admin"

    def __init__(self, resource: str, resource_id: str, user_id: str):
        super().__init__(resource, resource_id, user_id, "not an admin")


class InvalidAuthorityError(DomainError):
    """Raised for an authority tier outside self/moderator/admin."""

    code = "invalid-authority"

    def __init__(self, tier: object):
        self.tier = tier
        super().__init__(f"Invalid authority tier: {tier!r}")


# ============================================================================
# Conflict and integrity
# ============================================================================


class AlreadyVotedError(DomainError):
    """Raised when a user votes twice on the same comment."""

    code = "already-voted"

    def __init__(self, comment_id: str, user_id: str):
        super().__init__(f"User {user_id} has already voted on comment {comment_id}")


class InvariantViolationError(DomainError):
    """Stored data contradicts a model guarantee.

    This signals corruption rather than a bad request and should never be
    shown to users as a recoverable condition.
    """

    code = "invariant-violation"
