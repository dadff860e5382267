"""Tally deltas for comment vote counters."""

from discuss.domain.value.common import ValueObject


class TallyDelta(ValueObject):
    """Signed change to a comment's vote counters.

    Points always move with the counters (points = upvotes - downvotes), so
    only the two column deltas are stored.
    """

    upvotes: int = 0
    downvotes: int = 0

    @property
    def points(self) -> int:
        """Change in the signed point total."""
        return self.upvotes - self.downvotes

    @property
    def reputation(self) -> int:
        """Change in the author's reputation.

        Authors earn reputation from upvotes only; downvotes never cost
        points, so flipping a vote moves reputation by one.
        """
        return self.upvotes

    @classmethod
    def cast(cls, up: bool) -> "TallyDelta":
        """Delta for a new vote."""
        return cls(upvotes=1) if up else cls(downvotes=1)

    @classmethod
    def retract(cls, up: bool) -> "TallyDelta":
        """Delta for removing an existing vote."""
        return cls(upvotes=-1) if up else cls(downvotes=-1)

    @classmethod
    def flip(cls, from_up: bool) -> "TallyDelta":
        """Delta for changing the direction of an existing vote."""
        if from_up:
            return cls(upvotes=-1, downvotes=1)
        return cls(upvotes=1, downvotes=-1)
