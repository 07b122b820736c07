"""
Scheduling - spaced-repetition engine and card store

This package implements the review scheduler for BrainFood flashcards:
- Exponential forgetting curve calibrated to a target retention: R = r ** (Δt/S)
- Bounded difficulty (1-10) nudged by every rating
- Stability growth on success, reset on lapse
- Interval derived from stability and the target retention, capped at maximum_interval

Quick start:
    from brainfood import scheduling

    # Pure engine (no DB)
    state = scheduling.initial_state(now)
    state, interval, log = scheduling.next_review(state, scheduling.ReviewRating.GOOD, later)

    # Card store
    scheduling.init_db()
    result = scheduling.review_card(card_id, "good")
"""

# Core scheduler API (algorithm logic)
from brainfood.scheduling.scheduler import (
    ReviewLogEntry,
    ReviewResult,
    next_review,
    preview_intervals,
)

# Memory state
from brainfood.scheduling.memory_state import (
    SchedulingState,
    as_utc,
    calculate_retrievability,
    elapsed_days_between,
    initial_state,
    retrievability_at,
)

# Configuration
from brainfood.scheduling.config import (
    DEFAULT_CONFIG,
    SchedulingConfig,
    SchedulingWeights,
    get_config,
    load_config,
)

# Constants
from brainfood.scheduling.constants import (
    ReviewRating,
    FLOOR_DAYS,
    EPS,
    STABILITY_FLOOR,
    D_MIN,
    D_MAX,
)

# Errors
from brainfood.scheduling.exceptions import (
    SchedulingError,
    InvalidRatingError,
    ConfigurationError,
    BoxNotFoundError,
    CardNotFoundError,
    ConcurrentReviewError,
)

# Database API
from brainfood.scheduling.database import (
    init_db,
    reset_db,
    is_test_mode,
    create_box,
    get_box,
    list_boxes,
    update_box,
    delete_box,
    create_card,
    get_card,
    update_card,
    load_card_state,
    delete_card,
    review_card,
    get_due_cards,
    get_box_cards,
    get_review_logs,
)


__all__ = [
    # Core algorithm
    "next_review",
    "preview_intervals",
    "ReviewLogEntry",
    "ReviewResult",

    # Memory state
    "SchedulingState",
    "as_utc",
    "calculate_retrievability",
    "elapsed_days_between",
    "initial_state",
    "retrievability_at",

    # Configuration
    "DEFAULT_CONFIG",
    "SchedulingConfig",
    "SchedulingWeights",
    "get_config",
    "load_config",

    # Constants
    "ReviewRating",
    "FLOOR_DAYS",
    "EPS",
    "STABILITY_FLOOR",
    "D_MIN",
    "D_MAX",

    # Errors
    "SchedulingError",
    "InvalidRatingError",
    "ConfigurationError",
    "BoxNotFoundError",
    "CardNotFoundError",
    "ConcurrentReviewError",

    # Database operations
    "init_db",
    "reset_db",
    "is_test_mode",
    "create_box",
    "get_box",
    "list_boxes",
    "update_box",
    "delete_box",
    "create_card",
    "get_card",
    "update_card",
    "load_card_state",
    "delete_card",
    "review_card",
    "get_due_cards",
    "get_box_cards",
    "get_review_logs",
]
