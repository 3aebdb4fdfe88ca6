"""
Prediction Scoring Policy

A scoring policy turns a resolved prediction into an integer point award.
Callers depend on the ScoringPolicy protocol only, so the rules can change
(confidence curves, streak bonuses) without touching them.
"""

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from numbers import Real
from typing import Optional, Protocol


class InvalidConfidenceError(ValueError):
    """Confidence is not a number in [0, 1]"""

    def __init__(self, confidence: object):
        self.confidence = confidence
        super().__init__(f"Confidence must be a number between 0 and 1, got {confidence!r}")


def validate_confidence(confidence: object) -> float:
    """Reject anything outside [0, 1]; never clamp"""
    if isinstance(confidence, bool) or not isinstance(confidence, Real):
        raise InvalidConfidenceError(confidence)
    if math.isnan(confidence) or not 0 <= confidence <= 1:
        raise InvalidConfidenceError(confidence)
    return float(confidence)


@dataclass(frozen=True)
class PredictionOutcome:
    is_correct: bool
    confidence: float
    prediction_id: Optional[str] = None


class ScoringPolicy(Protocol):
    name: str

    def score(self, outcome: PredictionOutcome) -> int:
        """Points for the outcome, always >= 0"""
        ...


class LinearScoringV1:
    """
    Base award plus a bonus linear in confidence.

    Incorrect predictions score 0 whatever the confidence. Correct ones
    score ``10 + confidence * 10`` rounded half-up, computed on the decimal
    representation of confidence so 0.05 scores 11 and 0.15 scores 12.
    """

    name = "linear_v1"

    BASE_POINTS = 10
    CONFIDENCE_BONUS = 10

    def score(self, outcome: PredictionOutcome) -> int:
        confidence = validate_confidence(outcome.confidence)
        if not outcome.is_correct:
            return 0

        raw = Decimal(self.BASE_POINTS) + Decimal(str(confidence)) * Decimal(self.CONFIDENCE_BONUS)
        return int(raw.quantize(Decimal(1), rounding=ROUND_HALF_UP))


DEFAULT_SCORING_POLICY: ScoringPolicy = LinearScoringV1()
