"""Result types produced by the sub-score calculators."""

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Optional, Tuple, Union

Number = Union[int, float]


def round_half_up(value: Number, places: int = 0) -> Union[int, float]:
    """Round with ties away from zero (66.5 -> 67), not banker's rounding."""
    quantum = Decimal(1).scaleb(-places)
    rounded = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    return int(rounded) if places == 0 else float(rounded)


def clamp(value: Number, low: Number, high: Number) -> Number:
    return max(low, min(high, value))


@dataclass(frozen=True)
class ScoreFactor:
    """One signed contribution to a sub-score."""

    factor: str
    points: Number
    reason: str = ""


class Breakdown:
    """Ordered factor contributions, built while a score is computed."""

    def __init__(self):
        self._factors: List[ScoreFactor] = []

    def add(self, factor: str, points: Number, reason: str = "") -> Number:
        self._factors.append(ScoreFactor(factor, points, reason))
        return points

    def freeze(self) -> Tuple[ScoreFactor, ...]:
        return tuple(self._factors)


def breakdown_points(factors: Tuple[ScoreFactor, ...]) -> Dict[str, Number]:
    """Factor name to points, in contribution order."""
    return {f.factor: f.points for f in factors}


@dataclass(frozen=True)
class QualityScore:
    total: int
    breakdown: Tuple[ScoreFactor, ...] = field(default_factory=tuple)
    is_disqualified: bool = False
    disqualification_reason: Optional[str] = None

    def points(self) -> Dict[str, Number]:
        return breakdown_points(self.breakdown)


@dataclass(frozen=True)
class IntentScore:
    total: int
    breakdown: Tuple[ScoreFactor, ...] = field(default_factory=tuple)
    is_28_day_buyer: bool = False
    budget_floor_applied: bool = False

    def points(self) -> Dict[str, Number]:
        return breakdown_points(self.breakdown)


@dataclass(frozen=True)
class ConfidenceScore:
    total: float  # 0-10
    breakdown: Tuple[ScoreFactor, ...] = field(default_factory=tuple)

    def points(self) -> Dict[str, Number]:
        return breakdown_points(self.breakdown)


@dataclass(frozen=True)
class FakeLeadCheck:
    is_fake: bool
    flags: Tuple[str, ...] = field(default_factory=tuple)
    confidence: float = 0.0  # 0-1
