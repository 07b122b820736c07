class SchedulingError(Exception):
    """Base exception for the scheduling package."""
    pass


class InvalidRatingError(SchedulingError, ValueError):
    """Raised when a review rating is not one of Again/Hard/Good/Easy."""

    def __init__(self, value):
        self.value = value
        super().__init__(
            f"Invalid rating {value!r}: must be one of again, hard, good, easy (1-4)"
        )


class ConfigurationError(SchedulingError, ValueError):
    """Raised when scheduling configuration values are out of range."""
    pass


class CardNotFoundError(SchedulingError):
    """Raised when a card id does not exist in the card store."""

    def __init__(self, card_id: str):
        self.card_id = card_id
        super().__init__(f"Card not found: {card_id}")


class ConcurrentReviewError(SchedulingError):
    """Raised when another review of the same card was persisted first."""

    def __init__(self, card_id: str):
        self.card_id = card_id
        super().__init__(
            f"Card {card_id} was reviewed concurrently; reload its state and retry"
        )


class BoxNotFoundError(SchedulingError):
    """Raised when a box id does not exist (or belongs to another user)."""

    def __init__(self, box_id: str):
        self.box_id = box_id
        super().__init__(f"Box not found: {box_id}")
