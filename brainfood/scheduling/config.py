"""
Scheduling Configuration

Process-wide scheduling parameters: target retention, interval cap and the
weight set. Built once at startup (defaults, optionally overridden from the
environment) and passed explicitly into every engine call.

Environment overrides:
    SCHEDULER_REQUEST_RETENTION   e.g. 0.85
    SCHEDULER_MAXIMUM_INTERVAL    e.g. 365
    SCHEDULER_WEIGHTS             JSON object, e.g. {"easy_bonus": 1.5}
"""

from __future__ import annotations

import json
import logging
import math
import os
from dataclasses import dataclass, field, fields, replace
from functools import lru_cache
from typing import Mapping, Optional

from dotenv import load_dotenv

from brainfood.scheduling.constants import D_MAX, D_MIN, STABILITY_FLOOR
from brainfood.scheduling.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SchedulingWeights:
    """
    Tunable weights of the memory model.

    Defaults are close to the FSRS-5 starting values used by the mobile app.
    """
    init_stability: float = 0.4            # Stability of a new card (days)
    init_difficulty: float = 5.8           # Difficulty of a new card (1-10)
    stability_growth: float = 3.0          # Scale of stability gain on success
    stability_decay_exponent: float = 0.6  # Exponent applied to retrievability
    difficulty_step: float = 0.6           # Difficulty change per rating step
    difficulty_decay: float = 0.25         # Extra difficulty added on a lapse
    easy_bonus: float = 1.3                # Growth multiplier for Easy
    hard_penalty: float = 0.5              # Growth is scaled by (1 - hard_penalty) for Hard
    lapse_reset_stability: float = 0.2     # Stability after a lapse (days)


@dataclass(frozen=True)
class SchedulingConfig:
    request_retention: float = 0.9
    maximum_interval: int = 36500
    weights: SchedulingWeights = field(default_factory=SchedulingWeights)

    def __post_init__(self):
        validate_config(self)


def validate_config(config: SchedulingConfig) -> None:
    """
    Check every value is in the range the engine's invariants rely on.

    Raises:
        ConfigurationError: on the first out-of-range value
    """
    r = config.request_retention
    if not (isinstance(r, (int, float)) and 0.0 < r < 1.0):
        raise ConfigurationError(f"request_retention must be in (0, 1), got {r!r}")

    if not isinstance(config.maximum_interval, int) or config.maximum_interval < 1:
        raise ConfigurationError(
            f"maximum_interval must be an integer >= 1, got {config.maximum_interval!r}"
        )

    w = config.weights
    for f in fields(w):
        value = getattr(w, f.name)
        if not isinstance(value, (int, float)) or not math.isfinite(value):
            raise ConfigurationError(f"weight {f.name} must be a finite number, got {value!r}")

    if w.init_stability < STABILITY_FLOOR:
        raise ConfigurationError(f"init_stability must be >= {STABILITY_FLOOR}")
    if w.lapse_reset_stability < STABILITY_FLOOR:
        raise ConfigurationError(f"lapse_reset_stability must be >= {STABILITY_FLOOR}")
    if not D_MIN <= w.init_difficulty <= D_MAX:
        raise ConfigurationError(f"init_difficulty must be in [{D_MIN}, {D_MAX}]")
    if w.easy_bonus < 1.0:
        raise ConfigurationError("easy_bonus must be >= 1")
    if not 0.0 <= w.hard_penalty <= 1.0:
        raise ConfigurationError("hard_penalty must be in [0, 1]")

    for name in ("stability_growth", "stability_decay_exponent", "difficulty_step", "difficulty_decay"):
        if getattr(w, name) < 0:
            raise ConfigurationError(f"{name} must be >= 0")


DEFAULT_CONFIG = SchedulingConfig()


def _parse_weights(raw: str, base: SchedulingWeights) -> SchedulingWeights:
    try:
        overrides = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"SCHEDULER_WEIGHTS is not valid JSON: {e}") from e

    if not isinstance(overrides, dict):
        raise ConfigurationError("SCHEDULER_WEIGHTS must be a JSON object")

    known = {f.name for f in fields(SchedulingWeights)}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise ConfigurationError(f"Unknown scheduling weights: {', '.join(unknown)}")

    try:
        values = {k: float(v) for k, v in overrides.items()}
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"SCHEDULER_WEIGHTS values must be numbers: {e}") from e

    return replace(base, **values)


def load_config(env: Optional[Mapping[str, str]] = None) -> SchedulingConfig:
    """
    Build the scheduling config from defaults plus environment overrides.

    Args:
        env: Mapping to read instead of os.environ (a .env file is loaded
            into os.environ first when this is None)

    Returns:
        Validated, immutable SchedulingConfig
    """
    if env is None:
        load_dotenv()
        env = os.environ

    request_retention = DEFAULT_CONFIG.request_retention
    maximum_interval = DEFAULT_CONFIG.maximum_interval
    weights = DEFAULT_CONFIG.weights

    try:
        if env.get("SCHEDULER_REQUEST_RETENTION"):
            request_retention = float(env["SCHEDULER_REQUEST_RETENTION"])
        if env.get("SCHEDULER_MAXIMUM_INTERVAL"):
            maximum_interval = int(env["SCHEDULER_MAXIMUM_INTERVAL"])
    except ValueError as e:
        raise ConfigurationError(f"Invalid scheduler setting: {e}") from e

    if env.get("SCHEDULER_WEIGHTS"):
        weights = _parse_weights(env["SCHEDULER_WEIGHTS"], weights)

    config = SchedulingConfig(
        request_retention=request_retention,
        maximum_interval=maximum_interval,
        weights=weights,
    )
    logger.info(
        "Scheduling config loaded: retention=%s maximum_interval=%s",
        config.request_retention,
        config.maximum_interval,
    )
    return config


@lru_cache(maxsize=1)
def get_config() -> SchedulingConfig:
    """Process-wide config, loaded from the environment on first use."""
    return load_config()
