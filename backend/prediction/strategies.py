"""Jackpot strategies and the outcome ratios they target.

Each strategy maps to a fixed (home, draw, away) count that sums to the
17-fixture jackpot. The ratios are not defined for any other size.
"""

from __future__ import annotations

from typing import NamedTuple

from backend.common.schemas import Outcome, StrategyName

JACKPOT_FIXTURE_COUNT = 17
DEFAULT_STRATEGY: StrategyName = "balanced"

OUTCOMES: tuple[Outcome, ...] = ("1", "X", "2")


class OutcomeRatio(NamedTuple):
    home: int
    draw: int
    away: int

    def as_counts(self) -> dict[Outcome, int]:
        return {"1": self.home, "X": self.draw, "2": self.away}


STRATEGY_RATIOS: dict[StrategyName, OutcomeRatio] = {
    "balanced": OutcomeRatio(home=5, draw=6, away=6),
    "conservative": OutcomeRatio(home=8, draw=5, away=4),
    "aggressive": OutcomeRatio(home=3, draw=7, away=7),
}

STRATEGY_DESCRIPTIONS: dict[StrategyName, str] = {
    "balanced": "Balanced approach with even distribution (5-6-6)",
    "conservative": "Conservative approach favoring home wins (8-5-4)",
    "aggressive": "Aggressive approach with more draws/away wins (3-7-7)",
}

# Base confidence range per outcome; draws are the least certain call
BASE_CONFIDENCE_RANGES: dict[Outcome, tuple[int, int]] = {
    "1": (70, 90),
    "X": (60, 80),
    "2": (65, 85),
}


def resolve_strategy(name: str | None) -> StrategyName:
    """Return a known strategy name, falling back to "balanced" for anything else."""
    if name in STRATEGY_RATIOS:
        return name
    return DEFAULT_STRATEGY


def jitter_magnitude(risk_level: int) -> int:
    """Half-width of the confidence jitter for a risk level.

    Higher risk means more spread: ±5 up to 4, ±10 for 5-7, ±15 above 7.
    """
    if risk_level > 7:
        return 15
    if risk_level > 4:
        return 10
    return 5
