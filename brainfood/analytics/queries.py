"""
Data-loading helpers for statistics.
"""

from __future__ import annotations

import pandas as pd

from brainfood.scheduling import database

CARD_COLUMNS = ["id", "stability", "due", "last_review_at"]
LOG_COLUMNS = ["card_id", "rating", "reviewed_at"]


def load_cards_df(box_id: str) -> pd.DataFrame:
    """
    Load the scheduling fields of every card in a box into a dataframe.
    """
    rows = database.get_box_cards(box_id)
    if not rows:
        return pd.DataFrame(columns=CARD_COLUMNS)

    df = pd.DataFrame(rows)[CARD_COLUMNS].copy()
    df["due"] = pd.to_datetime(df["due"], utc=True)
    df["last_review_at"] = pd.to_datetime(df["last_review_at"], utc=True)
    return df


def load_review_logs_df(box_id: str) -> pd.DataFrame:
    """
    Load all review logs for a box into a dataframe.
    """
    rows = database.get_review_logs(box_id=box_id)
    if not rows:
        return pd.DataFrame(columns=LOG_COLUMNS)

    df = pd.DataFrame(rows)[LOG_COLUMNS].copy()
    df["rating"] = df["rating"].astype("int64")
    df["reviewed_at"] = pd.to_datetime(df["reviewed_at"], utc=True)
    return df.sort_values("reviewed_at").reset_index(drop=True)
