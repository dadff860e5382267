"""Entity identifiers.

All ids are UUIDs; the NewTypes keep a comment id from being passed where
a post id is expected.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
PostId = NewType("PostId", UUID)
CommunityId = NewType("CommunityId", UUID)
CommentId = NewType("CommentId", UUID)
VoteId = NewType("VoteId", UUID)
