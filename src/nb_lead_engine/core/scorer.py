"""Lead scoring engine - combines the sub-scores into a classified result."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from . import classifier as _classifier
from . import nb_score as _nb
from .classifier import CallPriority, Classification, PriorityInfo, call_priority_for, priority_for
from .confidence import calculate_confidence_score
from .config import ScoringConfig
from .fraud import detect_fake_lead
from .intent import calculate_intent_score
from .models import LeadRecord
from .quality import calculate_quality_score
from .results import ConfidenceScore, FakeLeadCheck, IntentScore, QualityScore, ScoreFactor
from .risk import detect_low_urgency, generate_risk_flags

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoringResult:
    """Everything the engine knows about one lead."""

    quality_score: QualityScore
    intent_score: IntentScore
    confidence_score: ConfidenceScore
    fake_lead_check: FakeLeadCheck
    classification: Classification
    priority: PriorityInfo
    call_priority: CallPriority
    risk_flags: List[str] = field(default_factory=list)
    is_28_day_buyer: bool = False
    low_urgency_flag: bool = False
    nb_score: int = 0
    nb_score_color: str = ""
    lead_id: Optional[str] = None

    @property
    def is_fake_lead(self) -> bool:
        return self.fake_lead_check.is_fake

    @property
    def fake_lead_flags(self) -> List[str]:
        return list(self.fake_lead_check.flags)

    @property
    def summary(self) -> str:
        """One-line summary of the scoring."""
        return (
            f"{self.classification.value} ({self.priority.priority.value}) - "
            f"NB {self.nb_score}, Q {self.quality_score.total}, "
            f"I {self.intent_score.total}, C {self.confidence_score.total}"
        )

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready representation with a stable key order."""

        def factors(breakdown):
            return [{"factor": f.factor, "points": f.points, "reason": f.reason} for f in breakdown]

        return {
            "lead_id": self.lead_id,
            "nb_score": self.nb_score,
            "nb_score_color": self.nb_score_color,
            "quality_score": {
                "total": self.quality_score.total,
                "breakdown": factors(self.quality_score.breakdown),
                "is_disqualified": self.quality_score.is_disqualified,
                "disqualification_reason": self.quality_score.disqualification_reason,
            },
            "intent_score": {
                "total": self.intent_score.total,
                "breakdown": factors(self.intent_score.breakdown),
                "is_28_day_buyer": self.intent_score.is_28_day_buyer,
                "budget_floor_applied": self.intent_score.budget_floor_applied,
            },
            "confidence_score": {
                "total": self.confidence_score.total,
                "breakdown": factors(self.confidence_score.breakdown),
            },
            "classification": self.classification.value,
            "priority": {
                "priority": self.priority.priority.value,
                "response_time": self.priority.response_time,
                "description": self.priority.description,
            },
            "call_priority": {
                "level": self.call_priority.level,
                "description": self.call_priority.description,
                "response_time": self.call_priority.response_time,
            },
            "is_fake_lead": self.is_fake_lead,
            "fake_lead_flags": self.fake_lead_flags,
            "risk_flags": list(self.risk_flags),
            "is_28_day_buyer": self.is_28_day_buyer,
            "low_urgency_flag": self.low_urgency_flag,
        }


class LeadScorer:
    """Scores leads against a ScoringConfig."""

    def __init__(self, config: Optional[ScoringConfig] = None):
        self.config = config or ScoringConfig()

    # Sub-scores

    def detect_fake_lead(self, lead: Any) -> FakeLeadCheck:
        return detect_fake_lead(LeadRecord.coerce(lead), self.config.fraud)

    def calculate_quality_score(self, lead: Any) -> QualityScore:
        return calculate_quality_score(LeadRecord.coerce(lead), self.config.quality)

    def calculate_intent_score(self, lead: Any) -> IntentScore:
        return calculate_intent_score(LeadRecord.coerce(lead), self.config.intent)

    def calculate_confidence_score(self, lead: Any) -> ConfidenceScore:
        return calculate_confidence_score(LeadRecord.coerce(lead), self.config.confidence)

    def classify(self, quality: float, intent: float, confidence: float = 0, is_spam: bool = False) -> Classification:
        return _classifier.classify(quality, intent, confidence, is_spam, self.config.classifier)

    def calculate_nb_score(self, quality: float = 0, intent: float = 0, confidence: float = 0) -> int:
        return _nb.calculate_nb_score(quality, intent, confidence, self.config.nb_score)

    def get_nb_score_color(self, score: float) -> str:
        return _nb.get_nb_score_color(score, self.config.nb_score)

    # Composite

    def score_lead(self, lead: Any, as_of: Optional[datetime] = None) -> ScoringResult:
        """Score one lead. Accepts a LeadRecord, a mapping or None."""
        record = LeadRecord.coerce(lead)

        fraud = self.detect_fake_lead(record)
        quality = self.calculate_quality_score(record)
        intent = self.calculate_intent_score(record)
        confidence = self.calculate_confidence_score(record)

        classification = self.classify(quality.total, intent.total, confidence.total, fraud.is_fake)
        if quality.is_disqualified and classification != Classification.SPAM:
            classification = Classification.DISQUALIFIED

        nb = self.calculate_nb_score(quality.total, intent.total, confidence.total)

        return ScoringResult(
            quality_score=quality,
            intent_score=intent,
            confidence_score=confidence,
            fake_lead_check=fraud,
            classification=classification,
            priority=priority_for(classification),
            call_priority=call_priority_for(classification, intent.is_28_day_buyer),
            risk_flags=generate_risk_flags(record, fraud, quality, confidence, as_of, self.config.risk),
            is_28_day_buyer=intent.is_28_day_buyer,
            low_urgency_flag=detect_low_urgency(record),
            nb_score=nb,
            nb_score_color=self.get_nb_score_color(nb),
            lead_id=record.id,
        )

    def score_batch(self, leads: Iterable[Any], as_of: Optional[datetime] = None) -> List[ScoringResult]:
        """Score many leads independently, preserving input order."""
        results = [self.score_lead(lead, as_of) for lead in leads]
        logger.info(f"Scored batch of {len(results)} leads")
        return results

    def explain_score(self, result: ScoringResult) -> str:
        """Get a detailed explanation of a scoring result."""
        lines = [
            f"NB Score: {result.nb_score} ({result.classification.value})",
            f"Priority: {result.priority.priority.value} ({result.priority.response_time}) - "
            f"{result.priority.description}",
            f"Call: level {result.call_priority.level}, {result.call_priority.response_time}",
        ]

        sections = (
            (f"Quality: {result.quality_score.total}/100", result.quality_score.breakdown),
            (f"Intent: {result.intent_score.total}/100", result.intent_score.breakdown),
            (f"Confidence: {result.confidence_score.total}/10", result.confidence_score.breakdown),
        )
        for title, breakdown in sections:
            lines.extend(["", title])
            lines.extend(_explain_factor(f) for f in breakdown)

        if result.fake_lead_flags:
            lines.extend(["", "Spam Flags:"])
            lines.extend(f"  - {flag}" for flag in result.fake_lead_flags)

        if result.risk_flags:
            lines.extend(["", "Risk Flags:"])
            lines.extend(f"  - {flag}" for flag in result.risk_flags)

        return "\n".join(lines)


def _explain_factor(factor: ScoreFactor) -> str:
    sign = "+" if factor.points > 0 else ""
    reason = f" ({factor.reason})" if factor.reason else ""
    return f"  {sign}{factor.points}: {factor.factor}{reason}"


_default_scorer = LeadScorer()


def score_lead(lead: Any, as_of: Optional[datetime] = None) -> ScoringResult:
    """Score a lead with the default configuration."""
    return _default_scorer.score_lead(lead, as_of)


def calculate_nb_score(quality: float = 0, intent: float = 0, confidence: float = 0) -> int:
    return _default_scorer.calculate_nb_score(quality, intent, confidence)


def get_nb_score_color(score: float) -> str:
    return _default_scorer.get_nb_score_color(score)
