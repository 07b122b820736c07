"""
Simulate the schedule a single card would follow.

Starting from a new card, apply the same rating at every due date and print
how stability, difficulty and the interval evolve. Useful when tuning
SCHEDULER_* settings before rolling them out.

Usage:
    python -m scripts.simulate_schedule --rating good --reviews 12
    python -m scripts.simulate_schedule --rating easy --retention 0.85 --max-interval 365
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from datetime import datetime, timezone

from brainfood import scheduling


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Simulate a card's review schedule")
    parser.add_argument("--rating", default="good", help="again, hard, good or easy (default: good)")
    parser.add_argument("--reviews", type=int, default=10, help="Number of reviews to simulate")
    parser.add_argument("--retention", type=float, help="Override request retention")
    parser.add_argument("--max-interval", type=int, help="Override maximum interval (days)")
    return parser.parse_args()


def main():
    args = parse_args()

    try:
        rating = scheduling.ReviewRating.parse(args.rating)
    except scheduling.InvalidRatingError as e:
        raise SystemExit(str(e))

    try:
        config = scheduling.load_config()
        if args.retention is not None:
            config = replace(config, request_retention=args.retention)
        if args.max_interval is not None:
            config = replace(config, maximum_interval=args.max_interval)
    except scheduling.ConfigurationError as e:
        raise SystemExit(str(e))

    now = datetime.now(timezone.utc)
    state = scheduling.initial_state(now, config)

    print(f"Rating: {rating.name}  retention: {config.request_retention}  max interval: {config.maximum_interval}d")
    print("-" * 60)
    print(f"{'#':>3}  {'stability':>10}  {'difficulty':>10}  {'interval':>8}  due")

    for i in range(1, args.reviews + 1):
        state, interval, _ = scheduling.next_review(state, rating, state.due, config)
        print(f"{i:>3}  {state.stability:>10.2f}  {state.difficulty:>10.2f}  {interval:>7}d  {state.due.date()}")


if __name__ == "__main__":
    main()
