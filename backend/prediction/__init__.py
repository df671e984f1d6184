"""Prediction engine — strategy-constrained 1/X/2 predictions for a jackpot.

Orchestrates: ratio resolution → bucket fill → risk jitter → wildcards → shuffle.
"""

from __future__ import annotations

from backend.prediction.generator import PredictionGenerator
from backend.prediction.service import generate_jackpot_predictions, summarize_predictions

__all__ = ["PredictionGenerator", "generate_jackpot_predictions", "summarize_predictions"]
