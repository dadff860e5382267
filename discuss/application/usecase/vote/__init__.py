"""Vote use cases."""

from .cast_vote import CastVoteRequest, CastVoteUseCase
from .change_vote import ChangeVoteRequest, ChangeVoteUseCase
from .remove_vote import RemoveVoteRequest, RemoveVoteUseCase

__all__ = [
    "CastVoteRequest",
    "CastVoteUseCase",
    "ChangeVoteRequest",
    "ChangeVoteUseCase",
    "RemoveVoteRequest",
    "RemoveVoteUseCase",
]
