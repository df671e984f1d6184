"""Tests for backend.prediction.generator — strategy-constrained generation.

Output order is shuffled, so every assertion here is about
aggregate invariants: length, outcome multiset, confidence bounds and
reasoning pool membership.
"""

from __future__ import annotations

import random
from collections import Counter
from unittest.mock import patch

import pytest

import backend.prediction.generator as generator_module
from backend.common.exceptions import ValidationError
from backend.common.schemas import PredictionOptions, PredictionRecord
from backend.prediction.exceptions import InvalidFixtureCountError
from backend.prediction.generator import PredictionGenerator, clamp_confidence
from backend.prediction.reasoning import REASONING_POOL, matching_reasonings

EXPECTED_COUNTS = {
    "balanced": {"1": 5, "X": 6, "2": 6},
    "conservative": {"1": 8, "X": 5, "2": 4},
    "aggressive": {"1": 3, "X": 7, "2": 7},
}


def _counts(records: list[PredictionRecord]) -> dict[str, int]:
    counts = Counter(r.outcome for r in records)
    return {o: counts.get(o, 0) for o in ("1", "X", "2")}


# ═══════════════════════════════════════════════════════════════
# Fixture count validation
# ═══════════════════════════════════════════════════════════════


@pytest.mark.parametrize("count", [0, 1, 16, 18, 34])
def test_wrong_fixture_count_raises(seeded_generator: PredictionGenerator, count: int) -> None:
    with pytest.raises(InvalidFixtureCountError, match="Exactly 17 fixtures required"):
        seeded_generator.generate(count, PredictionOptions())


def test_fixture_count_error_is_validation_error(seeded_generator: PredictionGenerator) -> None:
    """Callers can catch the generic ValidationError."""
    with pytest.raises(ValidationError) as exc_info:
        seeded_generator.generate(16)
    assert exc_info.value.context == {"fixture_count": 16}


def test_options_default_to_balanced(seeded_generator: PredictionGenerator) -> None:
    records = seeded_generator.generate(17)
    assert _counts(records) == EXPECTED_COUNTS["balanced"]


# ═══════════════════════════════════════════════════════════════
# Ratio invariant
# ═══════════════════════════════════════════════════════════════


@pytest.mark.parametrize("strategy", ["balanced", "conservative", "aggressive"])
@pytest.mark.parametrize("risk_level", [1, 6, 10])
def test_outcome_counts_match_strategy(
    seeded_generator: PredictionGenerator, strategy: str, risk_level: int
) -> None:
    records = seeded_generator.generate(
        17, PredictionOptions(strategy=strategy, risk_level=risk_level)
    )
    assert len(records) == 17
    assert _counts(records) == EXPECTED_COUNTS[strategy]


def test_aggressive_ratio_holds_across_many_runs() -> None:
    """Jitter only touches confidence, so the 3-7-7 split never moves."""
    generator = PredictionGenerator()
    options = PredictionOptions(strategy="aggressive", risk_level=1, include_wildcards=False)
    for _ in range(200):
        assert _counts(generator.generate(17, options)) == EXPECTED_COUNTS["aggressive"]


def test_conservative_example_scenario(seeded_generator: PredictionGenerator) -> None:
    records = seeded_generator.generate(
        17, PredictionOptions(strategy="conservative", risk_level=6)
    )
    assert _counts(records) == {"1": 8, "X": 5, "2": 4}
    assert all(50 <= r.confidence <= 95 for r in records)


@pytest.mark.parametrize("strategy", ["", "yolo", "BALANCED", "random"])
def test_unknown_strategy_falls_back_to_balanced(
    seeded_generator: PredictionGenerator, strategy: str
) -> None:
    records = seeded_generator.generate(17, PredictionOptions(strategy=strategy))
    assert _counts(records) == EXPECTED_COUNTS["balanced"]


# ═══════════════════════════════════════════════════════════════
# Confidence bounds
# ═══════════════════════════════════════════════════════════════


@pytest.mark.parametrize("risk_level", [-100, 0, 4, 5, 7, 8, 10, 1000])
def test_confidence_is_int_within_bounds(risk_level: int) -> None:
    generator = PredictionGenerator(rng=random.Random(risk_level))
    for _ in range(50):
        records = generator.generate(
            17, PredictionOptions(risk_level=risk_level, include_wildcards=True)
        )
        for record in records:
            assert isinstance(record.confidence, int)
            assert 50 <= record.confidence <= 95


def test_low_risk_confidence_stays_near_base_ranges() -> None:
    """At risk <= 4 the jitter is ±5, so home picks never drop below 65."""
    generator = PredictionGenerator(rng=random.Random(1))
    for _ in range(100):
        for record in generator.generate(17, PredictionOptions(strategy="conservative", risk_level=2)):
            if record.outcome == "1":
                assert 65 <= record.confidence <= 95
            elif record.outcome == "X":
                assert 55 <= record.confidence <= 85


@pytest.mark.parametrize(("value", "expected"), [(10, 50), (50, 50), (72, 72), (95, 95), (120, 95)])
def test_clamp_confidence(value: int, expected: int) -> None:
    assert clamp_confidence(value) == expected


# ═══════════════════════════════════════════════════════════════
# Wildcards
# ═══════════════════════════════════════════════════════════════


@pytest.mark.parametrize("strategy", ["balanced", "conservative", "aggressive"])
def test_wildcards_deviate_by_at_most_three(strategy: str) -> None:
    generator = PredictionGenerator(rng=random.Random(99))
    expected = EXPECTED_COUNTS[strategy]
    for _ in range(300):
        records = generator.generate(
            17, PredictionOptions(strategy=strategy, include_wildcards=True)
        )
        counts = _counts(records)
        assert len(records) == 17
        # Each re-rolled slot moves at most one record between outcomes
        surplus = sum(max(0, counts[o] - expected[o]) for o in expected)
        assert surplus <= 3


def test_wildcards_eventually_change_the_ratio() -> None:
    generator = PredictionGenerator(rng=random.Random(5))
    options = PredictionOptions(strategy="aggressive", include_wildcards=True)
    results = [_counts(generator.generate(17, options)) for _ in range(300)]
    assert any(counts != EXPECTED_COUNTS["aggressive"] for counts in results)


def test_wildcard_reroll_uses_low_confidence_range() -> None:
    """A re-rolled slot draws confidence from [55, 75]; force every roll to change."""

    class AlwaysChange(random.Random):
        def random(self) -> float:
            return 0.0

    generator = PredictionGenerator(rng=AlwaysChange(3))
    drafts = [("1", 90)] * 17
    result, rerolled = generator._apply_wildcards(drafts)
    assert rerolled in (2, 3)
    changed = [d for d in result if d != ("1", 90)]
    for _, confidence in changed:
        assert 55 <= confidence <= 75


# ═══════════════════════════════════════════════════════════════
# Reasoning and ordering
# ═══════════════════════════════════════════════════════════════


def test_reasoning_comes_from_pool_and_matches_outcome(
    seeded_generator: PredictionGenerator,
) -> None:
    for _ in range(20):
        for record in seeded_generator.generate(17, PredictionOptions(include_wildcards=True)):
            assert record.reasoning
            assert record.reasoning in REASONING_POOL
            assert record.reasoning in matching_reasonings(record.outcome)


def test_output_is_shuffled() -> None:
    """Bucket order (all 1s, then Xs, then 2s) should essentially never survive."""
    generator = PredictionGenerator(rng=random.Random(11))
    bucket_order = ["1"] * 5 + ["X"] * 6 + ["2"] * 6
    orders = [[r.outcome for r in generator.generate(17)] for _ in range(50)]
    assert any(order != bucket_order for order in orders)


def test_records_are_immutable(seeded_generator: PredictionGenerator) -> None:
    record = seeded_generator.generate(17)[0]
    with pytest.raises(Exception):
        record.confidence = 99  # type: ignore[misc]


def test_generation_logged(seeded_generator: PredictionGenerator) -> None:
    with patch.object(generator_module.logger, "info") as mock_info:
        seeded_generator.generate(17, PredictionOptions(strategy="aggressive", risk_level=8))

    mock_info.assert_called_once()
    assert mock_info.call_args[0][0] == "Predictions generated"
    data = mock_info.call_args[1]["extra"]["data"]
    assert data["strategy"] == "aggressive"
    assert data["risk_level"] == 8
    assert data["include_wildcards"] is False
    assert data["counts"] == {"1": 3, "X": 7, "2": 7}
