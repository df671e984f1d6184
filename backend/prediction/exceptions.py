"""Prediction-specific exceptions.

These subclass the common hierarchy so the FastAPI handlers in main.py
map them to 400 responses without extra wiring.
"""

from __future__ import annotations

from backend.common.exceptions import ValidationError


class InvalidFixtureCountError(ValidationError):
    """Raised when a jackpot does not hold exactly the required number of fixtures."""
