"""
State Updates

Difficulty, stability and interval update rules applied on every review.

Key principles:
- "Good" leaves difficulty unchanged; worse ratings raise it, better lower it
- A lapse resets stability to a small constant, not a fraction of the old one
- Success grows stability more when the card was close to being forgotten
"""

from __future__ import annotations

import math

from brainfood.scheduling.config import SchedulingConfig, SchedulingWeights
from brainfood.scheduling.constants import (
    D_MAX,
    D_MIN,
    NEUTRAL_RATING,
    STABILITY_FLOOR,
    ReviewRating,
)


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def update_difficulty(
    difficulty: float,
    rating: ReviewRating,
    weights: SchedulingWeights
) -> float:
    """
    Update difficulty based on the rating.

    Formula:
        D_new = clip(D + step * (3 - rating), 1, 10)

    A lapse additionally adds `difficulty_decay` (clipped again).

    Args:
        difficulty: Current difficulty (non-finite values fall back to init_difficulty)
        rating: Review rating
        weights: Scheduling weights

    Returns:
        New difficulty value (clipped to [1, 10])
    """
    if not math.isfinite(difficulty):
        difficulty = weights.init_difficulty

    new_difficulty = clamp(
        difficulty + weights.difficulty_step * (int(NEUTRAL_RATING) - int(rating)),
        D_MIN,
        D_MAX,
    )

    if rating == ReviewRating.AGAIN:
        new_difficulty = clamp(new_difficulty + weights.difficulty_decay, D_MIN, D_MAX)

    return new_difficulty


def rating_adjustment(rating: ReviewRating, weights: SchedulingWeights) -> float:
    """Growth multiplier for a successful rating (Easy > Good > Hard)."""
    if rating == ReviewRating.EASY:
        return weights.easy_bonus
    if rating == ReviewRating.HARD:
        return 1.0 - weights.hard_penalty
    return 1.0


def update_stability_on_success(
    stability: float,
    retrievability: float,
    rating: ReviewRating,
    weights: SchedulingWeights
) -> float:
    """
    Update stability after successful recall (Hard/Good/Easy).

    Formula:
        performance = R ** decay_exponent
        S_new = max(S, S_init) * (1 + growth * (1 - performance) * adj(rating))

    The (1 - performance) term rewards reviews that rescued a card close
    to being forgotten.

    Args:
        stability: Current stability
        retrievability: Retrievability just before this review
        rating: HARD, GOOD or EASY
        weights: Scheduling weights

    Returns:
        New stability value (never below STABILITY_FLOOR)
    """
    if rating == ReviewRating.AGAIN:
        raise ValueError("Use update_stability_on_lapse for AGAIN ratings")

    if not math.isfinite(stability):
        stability = weights.init_stability

    performance = retrievability ** weights.stability_decay_exponent
    adj = rating_adjustment(rating, weights)

    new_stability = max(stability, weights.init_stability) * (
        1.0 + weights.stability_growth * (1.0 - performance) * adj
    )
    return max(STABILITY_FLOOR, new_stability)


def update_stability_on_lapse(weights: SchedulingWeights) -> float:
    """Stability after a lapse: the configured reset value."""
    return max(STABILITY_FLOOR, weights.lapse_reset_stability)


def next_interval(stability: float, config: SchedulingConfig) -> int:
    """
    Interval in whole days until retrievability falls back to the target.

    Formula:
        I = S * ln(1 / (1 - r)), rounded and clipped to [1, maximum_interval]
    """
    raw_interval = stability * math.log(1.0 / (1.0 - config.request_retention))
    # cap before rounding; round() cannot take inf
    raw_interval = min(raw_interval, float(config.maximum_interval))
    return int(clamp(round(raw_interval), 1, config.maximum_interval))
