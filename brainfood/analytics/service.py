"""
Service layer to assemble statistics for a box.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

import pandas as pd

from brainfood.analytics.metrics import (
    compute_average_retrievability,
    compute_due_count,
    compute_next_due,
    compute_recent_reviews,
    compute_retention_rate,
    compute_total_lapses,
)
from brainfood.analytics.queries import load_cards_df, load_review_logs_df
from brainfood.analytics.types import BoxStats
from brainfood.scheduling.config import SchedulingConfig, get_config

RECENT_WINDOW_DAYS = 7


def build_box_stats(
    box_id: str,
    now: Optional[datetime] = None,
    config: Optional[SchedulingConfig] = None
) -> BoxStats:
    """
    Build all statistics shown for a box.
    """
    now_ts = pd.Timestamp(now if now is not None else datetime.now(timezone.utc))
    now_ts = now_ts.tz_localize("UTC") if now_ts.tzinfo is None else now_ts.tz_convert("UTC")
    config = config if config is not None else get_config()

    cards_df = load_cards_df(box_id)
    logs_df = load_review_logs_df(box_id)

    return BoxStats(
        box_id=box_id,
        due_count=compute_due_count(cards_df, now_ts),
        next_due=compute_next_due(cards_df, now_ts),
        total_cards=len(cards_df),
        total_reviews=len(logs_df),
        total_lapses=compute_total_lapses(logs_df),
        recent_reviews=compute_recent_reviews(logs_df, now_ts, RECENT_WINDOW_DAYS),
        retention_rate=compute_retention_rate(logs_df),
        average_retrievability=compute_average_retrievability(
            cards_df, now_ts, config.request_retention
        ),
    )
