"""Strategy-constrained prediction generator.

Turns a fixture count and a named strategy into a shuffled sequence of
PredictionRecords whose outcome counts match the strategy's target ratio:

    1. Ratio resolution (unknown strategy -> balanced)
    2. Bucket fill with per-outcome base confidence
    3. Risk jitter, clamped to [50, 95]
    4. Optional wildcard re-rolls (may break the exact ratio)
    5. Reasoning text chosen by outcome keywords
    6. Fisher-Yates shuffle so position never reveals the strategy

Usage:
    from backend.prediction.generator import PredictionGenerator

    generator = PredictionGenerator()
    records = generator.generate(17, PredictionOptions(strategy="conservative"))
"""

from __future__ import annotations

import random
from collections import Counter

from backend.common.logging import get_logger
from backend.common.metrics import PREDICTIONS_GENERATED_TOTAL, WILDCARDS_APPLIED_TOTAL
from backend.common.schemas import (
    CONFIDENCE_MAX,
    CONFIDENCE_MIN,
    Outcome,
    PredictionOptions,
    PredictionRecord,
)
from backend.prediction.exceptions import InvalidFixtureCountError
from backend.prediction.reasoning import select_reasoning
from backend.prediction.strategies import (
    BASE_CONFIDENCE_RANGES,
    JACKPOT_FIXTURE_COUNT,
    OUTCOMES,
    STRATEGY_RATIOS,
    OutcomeRatio,
    jitter_magnitude,
    resolve_strategy,
)

logger = get_logger("PREDICT")

WILDCARD_SLOTS = (2, 3)
WILDCARD_CHANGE_PROBABILITY = 0.3
WILDCARD_CONFIDENCE_RANGE = (55, 75)

# (outcome, confidence) before reasoning is attached
_Draft = tuple[Outcome, int]


def clamp_confidence(value: int) -> int:
    return max(CONFIDENCE_MIN, min(CONFIDENCE_MAX, value))


class PredictionGenerator:
    """Stateless generator; the only thing it holds is its random source.

    Args:
        rng: Random source. Defaults to a fresh ``random.Random()``;
            pass a seeded instance for reproducible runs.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    def generate(
        self,
        fixture_count: int,
        options: PredictionOptions | None = None,
    ) -> list[PredictionRecord]:
        """Generate one prediction per fixture for a jackpot.

        Args:
            fixture_count: Number of fixtures in the jackpot. Must be 17.
            options: Strategy, risk level and wildcard flag. Defaults to
                balanced / risk 6 / no wildcards.

        Returns:
            ``fixture_count`` records in shuffled order.

        Raises:
            InvalidFixtureCountError: If ``fixture_count`` is not 17.
        """
        if fixture_count != JACKPOT_FIXTURE_COUNT:
            raise InvalidFixtureCountError(
                f"Exactly {JACKPOT_FIXTURE_COUNT} fixtures required for jackpot prediction",
                context={"fixture_count": fixture_count},
            )

        options = options or PredictionOptions()
        strategy = resolve_strategy(options.strategy)

        drafts = self._fill_buckets(STRATEGY_RATIOS[strategy])
        drafts = self._apply_risk_jitter(drafts, options.risk_level)
        rerolled = 0
        if options.include_wildcards:
            drafts, rerolled = self._apply_wildcards(drafts)

        records = [
            PredictionRecord(
                outcome=outcome,
                confidence=confidence,
                reasoning=select_reasoning(outcome, self._rng),
            )
            for outcome, confidence in drafts
        ]
        self._rng.shuffle(records)

        PREDICTIONS_GENERATED_TOTAL.labels(strategy=strategy).inc()
        if rerolled:
            WILDCARDS_APPLIED_TOTAL.inc(rerolled)

        counts = Counter(r.outcome for r in records)
        logger.info(
            "Predictions generated",
            extra={
                "data": {
                    "strategy": strategy,
                    "requested_strategy": options.strategy,
                    "risk_level": options.risk_level,
                    "include_wildcards": options.include_wildcards,
                    "wildcards_rerolled": rerolled,
                    "counts": {o: counts.get(o, 0) for o in OUTCOMES},
                }
            },
        )
        return records

    def _fill_buckets(self, ratio: OutcomeRatio) -> list[_Draft]:
        drafts: list[_Draft] = []
        for outcome, count in ratio.as_counts().items():
            low, high = BASE_CONFIDENCE_RANGES[outcome]
            drafts.extend((outcome, self._rng.randint(low, high)) for _ in range(count))
        return drafts

    def _apply_risk_jitter(self, drafts: list[_Draft], risk_level: int) -> list[_Draft]:
        spread = jitter_magnitude(risk_level)
        return [
            (outcome, clamp_confidence(confidence + self._rng.randint(-spread, spread)))
            for outcome, confidence in drafts
        ]

    def _apply_wildcards(self, drafts: list[_Draft]) -> tuple[list[_Draft], int]:
        """Re-roll a few random slots; returns the new drafts and how many changed."""
        slots = self._rng.sample(range(len(drafts)), self._rng.choice(WILDCARD_SLOTS))
        result = list(drafts)
        rerolled = 0
        for index in slots:
            if self._rng.random() < WILDCARD_CHANGE_PROBABILITY:
                result[index] = (
                    self._rng.choice(OUTCOMES),
                    self._rng.randint(*WILDCARD_CONFIDENCE_RANGE),
                )
                rerolled += 1
        return result, rerolled
