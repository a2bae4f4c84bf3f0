"""Classification decision table and priority lookups."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .config import ClassifierThresholds, QuickTemperatureThresholds


class Classification(Enum):
    """Lead classification, evaluated by ``classify``."""

    HOT = "Hot"
    WARM_QUALIFIED = "Warm-Qualified"
    WARM_ENGAGED = "Warm-Engaged"
    NURTURE = "Nurture"
    COLD = "Cold"
    DISQUALIFIED = "Disqualified"
    SPAM = "Spam"

    @property
    def priority(self) -> "PriorityInfo":
        return priority_for(self)


class Priority(Enum):
    P1 = "P1"
    P2 = "P2"
    P3 = "P3"
    P4 = "P4"


@dataclass(frozen=True)
class PriorityInfo:
    priority: Priority
    response_time: str
    description: str


P1_INFO = PriorityInfo(Priority.P1, "< 1 hour", "High-value, high-intent lead requiring immediate attention")
P2_INFO = PriorityInfo(Priority.P2, "< 4 hours", "Qualified lead with good potential")
P3_INFO = PriorityInfo(Priority.P3, "< 24 hours", "Lead requiring nurturing before conversion")
P4_INFO = PriorityInfo(Priority.P4, "48+ hours", "Low priority or disqualified lead")

PRIORITY_BY_CLASSIFICATION = {
    Classification.HOT: P1_INFO,
    Classification.WARM_QUALIFIED: P2_INFO,
    Classification.WARM_ENGAGED: P2_INFO,
    Classification.NURTURE: P3_INFO,
    Classification.COLD: P4_INFO,
    Classification.DISQUALIFIED: P4_INFO,
    Classification.SPAM: P4_INFO,
}


def priority_for(classification: Classification) -> PriorityInfo:
    """Look up the response priority for a classification."""
    try:
        return PRIORITY_BY_CLASSIFICATION[Classification(classification)]
    except (KeyError, ValueError):
        raise ValueError(f"Unknown classification: {classification!r}") from None


def classify(
    quality: float,
    intent: float,
    confidence: float = 0,
    is_spam: bool = False,
    thresholds: Optional[ClassifierThresholds] = None,
) -> Classification:
    """Evaluate the classification table top-down; first match wins.

    ``confidence`` does not currently move the outcome but is part of the
    signature so callers pass the full score triple.
    """
    t = thresholds or ClassifierThresholds()

    if is_spam:
        return Classification.SPAM
    if quality < t.disqualify_below or intent < t.disqualify_below:
        return Classification.DISQUALIFIED
    if quality >= t.hot and intent >= t.hot:
        return Classification.HOT
    if quality >= t.hot and intent >= t.warm:
        return Classification.WARM_QUALIFIED
    if quality >= t.warm and intent >= t.hot:
        return Classification.WARM_ENGAGED
    if t.nurture_min <= quality <= t.nurture_max and t.nurture_min <= intent <= t.nurture_max:
        return Classification.NURTURE
    return Classification.COLD


@dataclass(frozen=True)
class CallPriority:
    """How quickly a salesperson should phone the lead (1 = now, 5 = never)."""

    level: int
    description: str
    response_time: str


CALL_PRIORITIES = {
    Classification.HOT: CallPriority(1, "Hot lead - call immediately", "Within 2 hours"),
    Classification.WARM_QUALIFIED: CallPriority(2, "Qualified lead - call today", "Within 4 hours"),
    Classification.WARM_ENGAGED: CallPriority(2, "Engaged lead - call today", "Within 4 hours"),
    Classification.NURTURE: CallPriority(3, "Nurture - follow up this week", "Within 24 hours"),
    Classification.COLD: CallPriority(4, "Low priority - add to nurture sequence", "Within 48 hours"),
    Classification.DISQUALIFIED: CallPriority(5, "Disqualified - do not call", "N/A"),
    Classification.SPAM: CallPriority(5, "Spam - do not call", "N/A"),
}

TWENTY_EIGHT_DAY_CALL = CallPriority(1, "28-day buyer - call immediately", "Within 1 hour")


def call_priority_for(classification: Classification, is_28_day_buyer: bool = False) -> CallPriority:
    """Call urgency. A 28-day buyer jumps the queue unless spam or disqualified."""
    if is_28_day_buyer and classification not in (Classification.SPAM, Classification.DISQUALIFIED):
        return TWENTY_EIGHT_DAY_CALL
    return CALL_PRIORITIES[classification]


class Temperature(Enum):
    HOT = "Hot"
    WARM = "Warm"
    COLD = "Cold"


def quick_temperature(
    quality: float, intent: float, thresholds: Optional[QuickTemperatureThresholds] = None
) -> Temperature:
    """Dashboard heuristic on the mean of quality and intent."""
    t = thresholds or QuickTemperatureThresholds()
    combined = (quality + intent) / 2
    if combined >= t.hot:
        return Temperature.HOT
    if combined >= t.warm:
        return Temperature.WARM
    return Temperature.COLD
