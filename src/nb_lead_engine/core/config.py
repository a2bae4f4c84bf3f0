"""Configurable point tables and thresholds for lead scoring."""

import json
import logging
import math
import os
from dataclasses import asdict, dataclass, field, fields
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = "NB_SCORING_CONFIG"


def default_config_path() -> Path:
    """Config file location, overridable with NB_SCORING_CONFIG."""
    override = os.environ.get(CONFIG_PATH_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".nb-lead-engine" / "scoring_config.json"


@dataclass
class QualityWeights:
    """Points for the quality (ability to transact) score."""

    baseline: int = 10

    # Financial proceedability
    cash_buyer: int = 30
    mortgage_has_broker: int = 20
    mortgage_wants_broker: int = 15
    mortgage_unknown_broker: int = 10
    mortgage_approved: int = 10
    mortgage_in_progress: int = 5
    proof_of_funds: int = 10
    solicitor_appointed: int = 5
    no_professional_connections: int = -10

    # Budget
    budget_specified: int = 5
    budget_missing: int = -15
    budget_unparseable: int = 0
    premium_budget: float = 1_000_000
    premium_budget_bonus: int = 5
    good_budget: float = 500_000
    good_budget_bonus: int = 3

    # Purpose
    primary_residence: int = 15
    dependent_studying: int = 15
    investment: int = 10
    holiday_home: int = 5

    complete_contact: int = 10

    # Hard disqualification (business policy, not algorithm)
    min_viable_budget: float = 50_000
    mismatch_budget: float = 2_000_000
    mismatch_max_bedrooms: int = 1


@dataclass
class IntentWeights:
    """Points for the intent (urgency) score."""

    twenty_eight_day: int = 40

    # Timeline buckets, descending
    timeline_immediate: int = 35
    timeline_short: int = 25
    timeline_medium: int = 12
    timeline_long: int = 5
    timeline_extended: int = 0
    timeline_browsing: int = -10
    timeline_unspecified: int = 3

    dependent_studying: int = 25
    primary_residence: int = 20
    investment: int = 10
    holiday_home: int = 5

    wants_broker: int = 10
    source_form: int = 10
    source_referral: int = 10
    source_whatsapp: int = 5

    active_pipeline: int = 15
    not_proceeding: int = -50
    duplicate: int = -25

    # High-value leads are never scored as low intent
    high_value_budget: float = 2_000_000
    high_value_floor: int = 50


@dataclass
class ConfidenceWeights:
    """Points for the 0-10 confidence (data trust) score."""

    baseline: float = 5.0
    name_present: float = 0.5
    name_missing: float = -1.0
    placeholder_name: float = -1.5
    email_valid: float = 1.0
    email_malformed: float = -1.0
    email_disposable: float = -1.5
    phone_valid: float = 1.0
    phone_malformed: float = -1.0
    no_contact: float = -2.0
    field_populated: float = 0.25
    detailed_notes: float = 1.0
    detailed_notes_length: int = 200
    basic_notes: float = 0.5
    basic_notes_length: int = 50
    proof_of_funds: float = 0.5
    inverted_budget_range: float = -1.0


@dataclass
class FraudRules:
    """Spam / fake-lead heuristics.

    A lead is fake when it raises at least ``min_flags`` flags.
    """

    min_flags: int = 1
    min_realistic_budget: float = 10_000
    contradiction_min_bedrooms: int = 5
    contradiction_max_budget: float = 100_000
    duplicate_threshold: int = 3
    min_phone_digits: int = 7
    max_phone_digits: int = 15

    # Contribution of each heuristic to the 0-1 confidence figure
    weights: Dict[str, int] = field(default_factory=lambda: {
        "name": 35,
        "email": 40,
        "phone": 30,
        "budget": 30,
        "contradiction": 25,
        "duplicate": 30,
        "status": 50,
    })


@dataclass
class ClassifierThresholds:
    """Per-sub-score thresholds for the classification table."""

    disqualify_below: int = 20
    hot: int = 70
    warm: int = 45
    nurture_min: int = 35
    nurture_max: int = 69


@dataclass
class QuickTemperatureThresholds:
    """Dashboard heuristic on the mean of quality and intent.

    Kept apart from ClassifierThresholds and NBScoreConfig bands; the
    three are not reconciled.
    """

    hot: int = 70
    warm: int = 45


@dataclass
class NBScoreConfig:
    """Weights and color bands for the composite NB Score."""

    quality_weight: float = 0.5
    intent_weight: float = 0.3
    confidence_weight: float = 0.2
    hot_band: int = 70
    warm_band: int = 40
    hot_color: str = "#34D399"
    warm_color: str = "#FBBF24"
    cold_color: str = "#EF4444"


@dataclass
class VerificationConfig:
    """Confidence deltas applied when identity verification completes."""

    pass_delta: float = 1.0
    fail_delta: float = -1.5
    max_risk_flags: int = 5


@dataclass
class RiskFlagRules:
    max_flags: int = 5
    spam_flags_carried: int = 2
    stale_after_days: int = 60
    low_confidence_below: float = 5.0
    domestic_countries: tuple = (
        "uk", "united kingdom", "great britain", "gb", "england",
        "scotland", "wales", "ni", "northern ireland",
    )


_SECTIONS = {
    "quality": QualityWeights,
    "intent": IntentWeights,
    "confidence": ConfidenceWeights,
    "fraud": FraudRules,
    "classifier": ClassifierThresholds,
    "quick_temperature": QuickTemperatureThresholds,
    "nb_score": NBScoreConfig,
    "verification": VerificationConfig,
    "risk": RiskFlagRules,
}


def _valid_value(default: Any, value: Any) -> bool:
    """Whether a loaded value has the same shape as the field default."""
    if isinstance(default, (int, float)):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return False
        return isinstance(value, int) or math.isfinite(value)
    if isinstance(default, tuple):
        return isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value)
    if isinstance(default, dict):
        return isinstance(value, dict) and all(_valid_value(0, v) for v in value.values())
    return isinstance(value, type(default))


def _build_section(name: str, cls, data: Any):
    if data is None:
        return cls()
    if not isinstance(data, dict):
        logger.warning(f"Ignoring scoring config section {name!r}: expected an object, got {type(data).__name__}")
        return cls()
    defaults = cls()
    kwargs = {}
    for f in fields(cls):
        if f.name not in data:
            continue
        value = data[f.name]
        if _valid_value(getattr(defaults, f.name), value):
            kwargs[f.name] = value
        else:
            logger.warning(f"Ignoring invalid {name}.{f.name} in scoring config: {value!r}")
    if cls is RiskFlagRules and "domestic_countries" in kwargs:
        kwargs["domestic_countries"] = tuple(kwargs["domestic_countries"])
    return cls(**kwargs)


def _check_ranges(config: "ScoringConfig"):
    """Reset values that load cleanly but would break scoring."""
    if config.fraud.min_flags < 1:
        logger.warning(f"fraud.min_flags must be at least 1, got {config.fraud.min_flags}; using default")
        config.fraud.min_flags = FraudRules().min_flags

    bands = config.nb_score
    if bands.warm_band > bands.hot_band:
        logger.warning(
            f"nb_score.warm_band ({bands.warm_band}) exceeds hot_band ({bands.hot_band}); using defaults"
        )
        bands.hot_band = NBScoreConfig().hot_band
        bands.warm_band = NBScoreConfig().warm_band

    if not 0 <= config.intent.high_value_floor <= 100:
        logger.warning(
            f"intent.high_value_floor must be between 0 and 100, got {config.intent.high_value_floor}; using default"
        )
        config.intent.high_value_floor = IntentWeights().high_value_floor


@dataclass
class ScoringConfig:
    """Every tunable number the scoring engine uses."""

    quality: QualityWeights = field(default_factory=QualityWeights)
    intent: IntentWeights = field(default_factory=IntentWeights)
    confidence: ConfidenceWeights = field(default_factory=ConfidenceWeights)
    fraud: FraudRules = field(default_factory=FraudRules)
    classifier: ClassifierThresholds = field(default_factory=ClassifierThresholds)
    quick_temperature: QuickTemperatureThresholds = field(default_factory=QuickTemperatureThresholds)
    nb_score: NBScoreConfig = field(default_factory=NBScoreConfig)
    verification: VerificationConfig = field(default_factory=VerificationConfig)
    risk: RiskFlagRules = field(default_factory=RiskFlagRules)

    updated_at: datetime = field(default_factory=datetime.now)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScoringConfig":
        """Build from a (possibly partial) dict.

        Unknown keys are ignored. Values of the wrong type or out of range
        are logged and replaced by their defaults.
        """
        if not isinstance(data, dict):
            raise TypeError(f"Scoring config must be a JSON object, got {type(data).__name__}")
        sections = {name: _build_section(name, section_cls, data.get(name)) for name, section_cls in _SECTIONS.items()}
        config = cls(**sections)
        _check_ranges(config)
        if data.get("updated_at"):
            try:
                config.updated_at = datetime.fromisoformat(data["updated_at"])
            except (TypeError, ValueError):
                logger.warning(f"Ignoring invalid updated_at in scoring config: {data['updated_at']!r}")
        return config

    def to_dict(self) -> Dict[str, Any]:
        data = {name: asdict(getattr(self, name)) for name in _SECTIONS}
        data["risk"]["domestic_countries"] = list(self.risk.domestic_countries)
        data["updated_at"] = self.updated_at.isoformat()
        return data


class ScoringConfigManager:
    """Load, edit and persist the scoring configuration."""

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize config manager."""
        self.config_path = Path(config_path) if config_path else default_config_path()
        self.config = self._load_config()

    def _load_config(self) -> ScoringConfig:
        """Load configuration from file."""
        if self.config_path.exists():
            try:
                with open(self.config_path, "r") as f:
                    return ScoringConfig.from_dict(json.load(f))
            except (OSError, ValueError, TypeError) as e:
                logger.error(f"Error loading scoring config from {self.config_path}: {e}")

        return ScoringConfig()

    def save_config(self):
        """Save configuration to file."""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "w") as f:
            json.dump(self.config.to_dict(), f, indent=2)

    def _touch_and_save(self):
        self.config.updated_at = datetime.now()
        self.save_config()

    def update_classifier_thresholds(
        self,
        hot: Optional[int] = None,
        warm: Optional[int] = None,
        nurture_min: Optional[int] = None,
        disqualify_below: Optional[int] = None,
    ):
        """Update the classification table thresholds."""
        thresholds = self.config.classifier
        if hot is not None:
            thresholds.hot = hot
            thresholds.nurture_max = hot - 1
        if warm is not None:
            thresholds.warm = warm
        if nurture_min is not None:
            thresholds.nurture_min = nurture_min
        if disqualify_below is not None:
            thresholds.disqualify_below = disqualify_below
        self._touch_and_save()

    def update_nb_bands(self, hot: int, warm: int):
        """Update the NB Score color band boundaries."""
        if warm > hot:
            raise ValueError(f"Warm band ({warm}) cannot exceed hot band ({hot})")
        self.config.nb_score.hot_band = hot
        self.config.nb_score.warm_band = warm
        self._touch_and_save()

    def set_fraud_min_flags(self, min_flags: int):
        """Set how many spam flags mark a lead as fake."""
        if min_flags < 1:
            raise ValueError("min_flags must be at least 1")
        self.config.fraud.min_flags = min_flags
        self._touch_and_save()

    def set_high_value_floor(self, budget: float, floor: int):
        """Set the budget that triggers the intent floor, and the floor itself."""
        if not 0 <= floor <= 100:
            raise ValueError("floor must be between 0 and 100")
        self.config.intent.high_value_budget = budget
        self.config.intent.high_value_floor = floor
        self._touch_and_save()
