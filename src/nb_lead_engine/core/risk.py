"""Risk flags shown to agents alongside the scores."""

from datetime import datetime
from typing import List, Optional

from .config import RiskFlagRules
from .models import LeadRecord, parse_date
from .results import ConfidenceScore, FakeLeadCheck, QualityScore
from .signals import (
    LOW_URGENCY_STATUSES,
    PurchasePurpose,
    TimelineBucket,
    classify_purpose,
    classify_timeline,
)


def is_international(lead: LeadRecord, rules: Optional[RiskFlagRules] = None) -> bool:
    """True when the lead gives a country outside the domestic list."""
    rules = rules or RiskFlagRules()
    country = (lead.country or "").strip().lower()
    return bool(country) and country not in rules.domestic_countries


def lead_age_days(lead: LeadRecord, as_of: Optional[datetime]) -> Optional[int]:
    """Days since the lead was created, or None when either date is unknown."""
    if as_of is None:
        return None
    created = parse_date(lead.created_at)
    if created is None:
        return None
    return (as_of.replace(tzinfo=None) - created).days


def generate_risk_flags(
    lead: LeadRecord,
    fraud: FakeLeadCheck,
    quality: QualityScore,
    confidence: ConfidenceScore,
    as_of: Optional[datetime] = None,
    rules: Optional[RiskFlagRules] = None,
) -> List[str]:
    """Ordered risk flags, most serious first, capped at ``rules.max_flags``."""
    rules = rules or RiskFlagRules()
    flags: List[str] = list(fraud.flags[: rules.spam_flags_carried])

    if quality.disqualification_reason:
        flags.append(quality.disqualification_reason)

    if lead.is_mortgage_buyer and not lead.mortgage_approved:
        flags.append("Mortgage not yet approved")

    if not lead.timeline and not lead.ready_within_28_days:
        flags.append("Timeline not specified")

    if lead.is_mortgage_buyer and not lead.has_broker:
        flags.append("Mortgage buyer without broker")

    if not lead.email and not lead.phone:
        flags.append("Limited contact information")

    if is_international(lead, rules):
        flags.append("International buyer - may need extended timeline")

    age = lead_age_days(lead, as_of)
    if age is not None and age > rules.stale_after_days:
        flags.append(f"Lead is {age} days old")

    if confidence.total < rules.low_confidence_below:
        flags.append("Low data confidence - needs verification")

    return flags[: rules.max_flags]


def detect_low_urgency(lead: LeadRecord) -> bool:
    """True for leads with no near-term intention to buy."""
    timeline = classify_timeline(lead.timeline)
    if timeline in (TimelineBucket.EXTENDED, TimelineBucket.BROWSING):
        return True
    if classify_purpose(lead.purpose) == PurchasePurpose.HOLIDAY_HOME and timeline == TimelineBucket.NONE:
        return True
    status = lead.status_text
    return any(s in status for s in LOW_URGENCY_STATUSES)
