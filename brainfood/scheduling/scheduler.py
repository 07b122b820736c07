"""
Scheduler - Review Algorithm Logic

Pure scheduling and state updates (no database calls).

Main workflow:
1. Load card state (caller's responsibility)
2. Calculate elapsed time and retrievability
3. Apply difficulty and stability update rules
4. Derive the next interval and due date
5. Return new state + interval + review-log entry

This module handles ONLY the algorithm logic.
Database I/O is handled by the database module.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import NamedTuple

from brainfood.scheduling import memory_state, updates
from brainfood.scheduling.config import DEFAULT_CONFIG, SchedulingConfig
from brainfood.scheduling.constants import ReviewRating
from brainfood.scheduling.memory_state import SchedulingState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReviewLogEntry:
    """
    Audit record of one review. Append-only; persisted by the card store.
    """
    rating: ReviewRating
    reviewed_at: datetime
    previous_stability: float
    new_stability: float
    previous_due: datetime
    new_due: datetime
    interval: int  # days


class ReviewResult(NamedTuple):
    state: SchedulingState
    interval: int
    log: ReviewLogEntry


def next_review(
    state: SchedulingState,
    rating: ReviewRating,
    now: datetime,
    config: SchedulingConfig = DEFAULT_CONFIG
) -> ReviewResult:
    """
    Process a review and return the new state, interval and log entry.

    This is the core scheduling algorithm. No database calls, no clock
    reads, no mutation of `state`.

    Implausible stored values (non-positive stability, out-of-range
    difficulty, `now` earlier than the last review) are clamped rather
    than rejected, so a card always comes back in a valid, schedulable state.

    Args:
        state: Current scheduling state of the card
        rating: Validated review rating (see ReviewRating.parse)
        now: Review timestamp
        config: Scheduling config

    Returns:
        ReviewResult(state, interval, log); unpacks as a 3-tuple
    """
    weights = config.weights
    now = memory_state.as_utc(now)

    elapsed_days = memory_state.elapsed_days_between(
        state.last_review_at if state.last_review_at is not None else now,
        now,
    )
    retrievability = memory_state.calculate_retrievability(
        state.stability, elapsed_days, config.request_retention
    )

    new_difficulty = updates.update_difficulty(state.difficulty, rating, weights)

    reps = max(0, state.reps)
    lapses = max(0, state.lapses)

    if rating == ReviewRating.AGAIN:
        new_stability = updates.update_stability_on_lapse(weights)
        lapses += 1
    else:
        new_stability = updates.update_stability_on_success(
            state.stability, retrievability, rating, weights
        )
        reps += 1

    interval = updates.next_interval(new_stability, config)
    new_due = now + timedelta(days=interval)

    previous_due = memory_state.as_utc(state.due) if state.due is not None else now
    previous_stability = state.stability

    new_state = SchedulingState(
        stability=new_stability,
        difficulty=new_difficulty,
        due=new_due,
        last_review_at=now,
        reps=reps,
        lapses=lapses,
    )

    log_entry = ReviewLogEntry(
        rating=rating,
        reviewed_at=now,
        previous_stability=previous_stability,
        new_stability=new_stability,
        previous_due=previous_due,
        new_due=new_due,
        interval=interval,
    )

    logger.debug(
        "review rating=%s elapsed=%.3fd R=%.4f S=%.4f->%.4f D=%.3f->%.3f interval=%dd",
        rating.name,
        elapsed_days,
        retrievability,
        previous_stability,
        new_stability,
        state.difficulty,
        new_difficulty,
        interval,
    )

    return ReviewResult(new_state, interval, log_entry)


def preview_intervals(
    state: SchedulingState,
    now: datetime,
    config: SchedulingConfig = DEFAULT_CONFIG
) -> dict[ReviewRating, int]:
    """
    Interval each rating would produce, for showing on the answer buttons.

    Args:
        state: Current scheduling state
        now: Time the card is being shown
        config: Scheduling config

    Returns:
        Mapping of every ReviewRating to its interval in days
    """
    return {
        rating: next_review(state, rating, now, config).interval
        for rating in ReviewRating
    }
