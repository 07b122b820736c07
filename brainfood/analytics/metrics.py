"""
Metric computations for deck statistics.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

import pandas as pd

from brainfood.scheduling.constants import EPS, FLOOR_DAYS, ReviewRating


def compute_due_count(cards_df: pd.DataFrame, now: pd.Timestamp) -> int:
    """
    Count cards whose due date has been reached.
    """
    if cards_df.empty:
        return 0
    return int((cards_df["due"] <= now).sum())


def compute_next_due(cards_df: pd.DataFrame, now: pd.Timestamp) -> Optional[datetime]:
    """
    Earliest due date strictly after `now`, or None.
    """
    if cards_df.empty:
        return None
    upcoming = cards_df.loc[cards_df["due"] > now, "due"]
    if upcoming.empty:
        return None
    return upcoming.min().to_pydatetime()


def compute_total_lapses(logs_df: pd.DataFrame) -> int:
    if logs_df.empty:
        return 0
    return int((logs_df["rating"] == int(ReviewRating.AGAIN)).sum())


def compute_recent_reviews(logs_df: pd.DataFrame, now: pd.Timestamp, days: int) -> int:
    """
    Count reviews in the `days`-day window ending at `now`.
    """
    if logs_df.empty:
        return 0
    window_start = now - pd.Timedelta(days=days)
    return int((logs_df["reviewed_at"] >= window_start).sum())


def compute_retention_rate(logs_df: pd.DataFrame) -> Optional[float]:
    """
    Share of reviews that were not lapses.
    """
    if logs_df.empty:
        return None
    return float((logs_df["rating"] != int(ReviewRating.AGAIN)).mean())


def compute_average_retrievability(
    cards_df: pd.DataFrame,
    now: pd.Timestamp,
    request_retention: float
) -> Optional[float]:
    """
    Mean predicted recall probability over the box at `now`.

    Uses the same forgetting curve as the scheduler: R = r ** (Δt / S).
    Cards without a review count as fully retrievable.
    """
    if cards_df.empty:
        return None

    elapsed_days = (now - cards_df["last_review_at"]).dt.total_seconds() / 86400.0
    elapsed_days = elapsed_days.clip(lower=FLOOR_DAYS)
    stability = cards_df["stability"].astype("float64").clip(lower=EPS)

    retrievability = request_retention ** (elapsed_days / stability)
    retrievability = retrievability.fillna(1.0)
    return float(retrievability.mean())
