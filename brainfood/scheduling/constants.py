"""
Scheduling Constants

Rating scale and the fixed numeric floors/bounds of the scheduling engine.
Tunable weights live in config.py, not here.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Union

from brainfood.scheduling.exceptions import InvalidRatingError


# ---- Review Ratings ----

class ReviewRating(IntEnum):
    """Learner's self-assessed recall, ordered worst to best."""
    AGAIN = 1   # Forgotten (lapse)
    HARD = 2    # Recalled with high effort
    GOOD = 3    # Recalled normally
    EASY = 4    # Recalled fluently

    @classmethod
    def parse(cls, value: Union["ReviewRating", int, str]) -> "ReviewRating":
        """
        Validate caller input and turn it into a ReviewRating.

        Accepts a ReviewRating, an int 1-4, or one of the names
        "again", "hard", "good", "easy" (case-insensitive).

        Raises:
            InvalidRatingError: for anything outside the four ratings
        """
        if isinstance(value, cls):
            return value

        # bool is an int subclass; True/False are not ratings
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                raise InvalidRatingError(value) from None

        if isinstance(value, str):
            name = value.strip().upper()
            if name in cls.__members__:
                return cls[name]
            if name.isdecimal():
                return cls.parse(int(name))

        raise InvalidRatingError(value)


# ---- Engine Constants ----

FLOOR_DAYS = 0.04        # Minimum elapsed time (~1 hour), in days
EPS = 0.01               # Stability floor inside the retrievability exponent
STABILITY_FLOOR = 0.01   # Minimum stability ever written back (days)
D_MIN = 1.0              # Minimum difficulty
D_MAX = 10.0             # Maximum difficulty
NEUTRAL_RATING = ReviewRating.GOOD  # Rating that leaves difficulty unchanged

SECONDS_PER_DAY = 86400.0
