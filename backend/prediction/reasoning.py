"""Canned reasoning sentences attached to generated predictions."""

from __future__ import annotations

import random
from collections.abc import Sequence

from backend.common.schemas import Outcome

REASONING_POOL: tuple[str, ...] = (
    "Strong home form indicates advantage",
    "Recent away victories suggest momentum",
    "Even recent form between teams",
    "Head-to-head record favors selection",
    "Home advantage factor significant",
    "Away team's attacking prowess",
    "Tactical matchup favors home side",
    "Away team's defensive solidity",
    "Historical stalemate tendency",
    "Goal-scoring patterns suggest draw",
    "Form guide indicates home strength",
    "Key player availability impacts outcome",
    "Recent meeting patterns analyzed",
    "Home crowd support crucial",
    "Away team motivation high",
    "Defensive records suggest low-scoring",
    "Statistical model confidence high",
)

OUTCOME_KEYWORDS: dict[Outcome, tuple[str, ...]] = {
    "1": ("home", "advantage", "form"),
    "X": ("draw", "even", "stalemate"),
    "2": ("away", "momentum", "attacking"),
}


def matching_reasonings(outcome: Outcome, pool: Sequence[str] = REASONING_POOL) -> list[str]:
    """Sentences from ``pool`` containing any keyword for ``outcome``.

    Matching is case-sensitive: "Home crowd support crucial" is not a home pick.
    """
    keywords = OUTCOME_KEYWORDS[outcome]
    return [text for text in pool if any(word in text for word in keywords)]


def select_reasoning(
    outcome: Outcome,
    rng: random.Random,
    pool: Sequence[str] = REASONING_POOL,
) -> str:
    """Pick a reasoning sentence for ``outcome``.

    Falls back to the whole pool when no sentence matches the outcome.
    """
    candidates = matching_reasonings(outcome, pool) or list(pool)
    return rng.choice(candidates)
