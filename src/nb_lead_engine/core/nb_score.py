"""Composite NB Score and its color bands."""

import logging
import math
from decimal import Decimal
from enum import Enum
from typing import Optional

from .config import NBScoreConfig
from .results import round_half_up

logger = logging.getLogger(__name__)


class NBScoreBand(Enum):
    HOT = "hot"
    WARM = "warm"
    COLD = "cold"


def _as_decimal(value) -> Decimal:
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        logger.debug(f"Non-numeric NB Score input {value!r}, using 0")
        return Decimal(0)
    if not math.isfinite(number):
        logger.debug(f"Non-finite NB Score input {value!r}, using 0")
        return Decimal(0)
    return Decimal(str(number))


def calculate_nb_score(
    quality: float = 0,
    intent: float = 0,
    confidence: float = 0,
    config: Optional[NBScoreConfig] = None,
) -> int:
    """Blend the three sub-scores into the 0-100 NB Score.

    quality*0.5 + intent*0.3 + (confidence/10*100)*0.2, rounded half up.
    Computed in Decimal so 66.5 becomes 67.
    """
    config = config or NBScoreConfig()
    q = _as_decimal(quality)
    i = _as_decimal(intent)
    c = _as_decimal(confidence) / 10 * 100

    raw = (
        q * Decimal(str(config.quality_weight))
        + i * Decimal(str(config.intent_weight))
        + c * Decimal(str(config.confidence_weight))
    )
    return round_half_up(raw)


def get_nb_score_band(score: float, config: Optional[NBScoreConfig] = None) -> NBScoreBand:
    config = config or NBScoreConfig()
    score = _as_decimal(score)
    if score >= config.hot_band:
        return NBScoreBand.HOT
    if score >= config.warm_band:
        return NBScoreBand.WARM
    return NBScoreBand.COLD


def get_nb_score_color(score: float, config: Optional[NBScoreConfig] = None) -> str:
    """Hex color token for a score's band."""
    config = config or NBScoreConfig()
    band = get_nb_score_band(score, config)
    if band == NBScoreBand.HOT:
        return config.hot_color
    if band == NBScoreBand.WARM:
        return config.warm_color
    return config.cold_color
