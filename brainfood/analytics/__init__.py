"""
Statistics package exports.
"""

from brainfood.analytics.service import RECENT_WINDOW_DAYS, build_box_stats
from brainfood.analytics.types import BoxStats

__all__ = [
    "RECENT_WINDOW_DAYS",
    "build_box_stats",
    "BoxStats",
]
