"""
Types for deck statistics.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class BoxStats:
    """
    Snapshot of review statistics for one box.
    """
    box_id: str
    due_count: int
    next_due: Optional[datetime]  # Earliest due date still in the future
    total_cards: int
    total_reviews: int
    total_lapses: int
    recent_reviews: int  # Reviews in the last RECENT_WINDOW_DAYS
    retention_rate: Optional[float]  # Share of non-Again reviews; None without reviews
    average_retrievability: Optional[float]  # Mean predicted recall now; None without cards
