"""Core scoring engine for property lead qualification."""

from .classifier import CallPriority, Classification, Priority, PriorityInfo, Temperature, quick_temperature
from .config import ScoringConfig, ScoringConfigManager
from .models import LeadRecord
from .nb_score import NBScoreBand, get_nb_score_band
from .scorer import LeadScorer, ScoringResult, calculate_nb_score, get_nb_score_color, score_lead
from .verification import VerificationOutcome, apply_verification

__all__ = [
    "LeadScorer",
    "ScoringResult",
    "LeadRecord",
    "Classification",
    "Priority",
    "PriorityInfo",
    "CallPriority",
    "Temperature",
    "quick_temperature",
    "NBScoreBand",
    "get_nb_score_band",
    "ScoringConfig",
    "ScoringConfigManager",
    "VerificationOutcome",
    "apply_verification",
    "score_lead",
    "calculate_nb_score",
    "get_nb_score_color",
]
