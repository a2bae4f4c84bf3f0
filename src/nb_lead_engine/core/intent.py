"""Intent score - how soon and how seriously the lead means to buy."""

from typing import Optional

from .config import IntentWeights
from .models import LeadRecord
from .results import Breakdown, IntentScore, clamp
from .signals import (
    ACTIVE_PIPELINE_STATUSES,
    PurchasePurpose,
    SourceType,
    TimelineBucket,
    classify_purpose,
    classify_source,
    classify_timeline,
    is_28_day_timeline,
)

_TIMELINE_FACTORS = {
    TimelineBucket.IMMEDIATE: ("Timeline Within 1 Month", "timeline_immediate", "Looking to purchase within a month"),
    TimelineBucket.SHORT: ("Timeline 3 Months", "timeline_short", "Looking to purchase within 3 months"),
    TimelineBucket.MEDIUM: ("Timeline 6 Months", "timeline_medium", "Looking to purchase within 6 months"),
    TimelineBucket.LONG: ("Timeline 6+ Months", "timeline_long", "Longer timeline (6-12 months)"),
    TimelineBucket.EXTENDED: ("Timeline 18+ Months", "timeline_extended", "No rush - 18 months or more"),
    TimelineBucket.BROWSING: ("Just Browsing", "timeline_browsing", "Browsing with no purchase plan"),
    TimelineBucket.UNSPECIFIED: ("Timeline Specified", "timeline_unspecified", "Timeline given but not recognised"),
}


def is_28_day_buyer(lead: LeadRecord) -> bool:
    """Ready-within-28-days flag set, or the timeline says so."""
    return lead.ready_within_28_days or is_28_day_timeline(lead.timeline)


def qualifies_for_budget_floor(lead: LeadRecord, weights: IntentWeights) -> bool:
    return lead.budget_value >= weights.high_value_budget


def calculate_intent_score(lead: LeadRecord, weights: Optional[IntentWeights] = None) -> IntentScore:
    """Score a lead's urgency and readiness to proceed, 0-100."""
    weights = weights or IntentWeights()
    b = Breakdown()
    total = 0
    twenty_eight_day = is_28_day_buyer(lead)

    # === TIMELINE ===
    if twenty_eight_day:
        total += b.add(
            "28-Day Purchase Intent",
            weights.twenty_eight_day,
            "Ready to purchase within 28 days",
        )
    else:
        bucket = classify_timeline(lead.timeline)
        if bucket in _TIMELINE_FACTORS:
            name, attr, reason = _TIMELINE_FACTORS[bucket]
            total += b.add(name, getattr(weights, attr), reason)

    # === PURPOSE ===
    purpose = classify_purpose(lead.purpose)
    if purpose == PurchasePurpose.DEPENDENT_STUDYING:
        total += b.add("Dependent Studying", weights.dependent_studying, "Specific timeline requirement")
    elif purpose == PurchasePurpose.PRIMARY_RESIDENCE:
        total += b.add("Primary Residence", weights.primary_residence, "Primary residence purchase - genuine need")
    elif purpose == PurchasePurpose.INVESTMENT:
        total += b.add("Investment", weights.investment, "Investment purchase")
    elif purpose == PurchasePurpose.HOLIDAY_HOME:
        total += b.add("Holiday/Second Home", weights.holiday_home, "Holiday or second home - less urgent")

    # === COMMITMENT ===
    if lead.wants_broker:
        total += b.add("Wants Broker", weights.wants_broker, "Actively seeking broker connection")

    # === SOURCE ===
    source = classify_source(lead.source)
    if source == SourceType.FORM:
        total += b.add("Source: Form", weights.source_form, "Inquiry via form submission - deliberate action")
    elif source == SourceType.REFERRAL:
        total += b.add("Source: Referral", weights.source_referral, "Referred lead")
    elif source == SourceType.WHATSAPP:
        total += b.add("Source: WhatsApp", weights.source_whatsapp, "WhatsApp inquiry - engaged but informal")

    # === PIPELINE STATUS ===
    status = lead.status_text
    if any(s in status for s in ACTIVE_PIPELINE_STATUSES):
        total += b.add("Active Pipeline Stage", weights.active_pipeline, f"Status: {lead.status}")
    if "not proceeding" in status:
        total += b.add("Not Proceeding", weights.not_proceeding, "Lead marked as not proceeding")
    if "duplicate" in status:
        total += b.add("Duplicate Lead", weights.duplicate, "Lead marked as duplicate")

    total = int(clamp(total, 0, 100))

    # === HIGH-VALUE FLOOR ===
    floor_applied = False
    if qualifies_for_budget_floor(lead, weights) and total < weights.high_value_floor:
        b.add(
            "High-Value Budget Floor",
            weights.high_value_floor - total,
            f"Budget at or above £{weights.high_value_budget:,.0f} - intent floored at {weights.high_value_floor}",
        )
        total = weights.high_value_floor
        floor_applied = True

    return IntentScore(
        total=total,
        breakdown=b.freeze(),
        is_28_day_buyer=twenty_eight_day,
        budget_floor_applied=floor_applied,
    )
