"""Repository interfaces for the discuss domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from discuss.domain.repository.comment import CommentRepository
from discuss.domain.repository.mute import MuteRepository
from discuss.domain.repository.post import PostRepository
from discuss.domain.repository.report import ReportRepository
from discuss.domain.repository.transaction import TransactionManager
from discuss.domain.repository.user import UserRepository
from discuss.domain.repository.vote import UNIQUE_VOTE_CONSTRAINT, VoteRepository

__all__ = [
    "CommentRepository",
    "MuteRepository",
    "PostRepository",
    "ReportRepository",
    "TransactionManager",
    "UNIQUE_VOTE_CONSTRAINT",
    "UserRepository",
    "VoteRepository",
]
