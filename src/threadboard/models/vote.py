"""Vote direction shared by threads and comments.

Votes are lightweight reaction counters: no per-voter row is stored, every
vote increments the matching counter on the target.
"""

import enum


class VoteDirection(str, enum.Enum):
    """Direction of a vote."""

    UP = "up"
    DOWN = "down"

    @property
    def counter(self) -> str:
        """Name of the counter column this direction increments."""
        return "upvotes" if self is VoteDirection.UP else "downvotes"
