"""
Memory State - Scheduling State and Retrievability

Defines the per-card scheduling state and the derived quantities the engine
reads from it.

Key concepts:
- Stability (S): How slowly memory decays (in days)
- Difficulty (D): How hard the card is to learn (1-10 scale)
- Retrievability (R): Probability of successful recall at time t
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from brainfood.scheduling.config import DEFAULT_CONFIG, SchedulingConfig
from brainfood.scheduling.constants import EPS, FLOOR_DAYS, SECONDS_PER_DAY


@dataclass(frozen=True)
class SchedulingState:
    """
    Scheduling state for a single card.

    Owned by the card record in the card store; only ever replaced by the
    result of a review.
    """
    stability: float  # S, in days
    difficulty: float  # D, range 1-10
    due: datetime  # Next time the card should be shown (UTC)
    last_review_at: Optional[datetime]  # None if never reviewed
    reps: int = 0  # Lifetime count of non-lapse reviews
    lapses: int = 0  # Count of "Again" reviews


def as_utc(timestamp: datetime) -> datetime:
    """
    Normalize a timestamp to an aware UTC datetime.

    Naive datetimes are taken to already be UTC.
    """
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=timezone.utc)
    return timestamp.astimezone(timezone.utc)


def elapsed_days_between(earlier: Optional[datetime], later: datetime) -> float:
    """
    Days from `earlier` to `later`, floored at FLOOR_DAYS.

    A missing `earlier` counts as zero elapsed time. Negative durations
    (clock skew, `later` before `earlier`) also collapse to the floor.
    """
    if earlier is None:
        return FLOOR_DAYS

    delta = as_utc(later) - as_utc(earlier)
    return max(FLOOR_DAYS, delta.total_seconds() / SECONDS_PER_DAY)


def calculate_retrievability(
    stability: float,
    elapsed_days: float,
    request_retention: float
) -> float:
    """
    Calculate retrievability using exponential forgetting.

    Formula: R = r ** (Δt / S)

    Calibrated so that at Δt == S, R equals the request retention r.

    Args:
        stability: Current stability in days
        elapsed_days: Time since last review in days
        request_retention: Target recall probability

    Returns:
        Retrievability between 0 and 1
    """
    if not math.isfinite(stability):
        stability = EPS
    return request_retention ** (max(elapsed_days, 0.0) / max(stability, EPS))


def retrievability_at(
    state: SchedulingState,
    now: datetime,
    config: SchedulingConfig = DEFAULT_CONFIG
) -> float:
    """
    Predicted recall probability of a card at `now`.

    Cards that have never been reviewed report 1.0 (nothing to forget yet).
    """
    if state.last_review_at is None:
        return 1.0

    days = elapsed_days_between(state.last_review_at, now)
    return calculate_retrievability(state.stability, days, config.request_retention)


def initial_state(
    now: datetime,
    config: SchedulingConfig = DEFAULT_CONFIG
) -> SchedulingState:
    """
    State for a freshly created card. The card is immediately due.

    Args:
        now: Creation time
        config: Scheduling config supplying the initial weights

    Returns:
        New SchedulingState
    """
    now = as_utc(now)
    return SchedulingState(
        stability=config.weights.init_stability,
        difficulty=config.weights.init_difficulty,
        due=now,
        last_review_at=now,
        reps=0,
        lapses=0,
    )
