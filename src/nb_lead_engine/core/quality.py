"""Quality score - the lead's financial and practical ability to transact.

Financial proceedability carries the most weight, then commitment signals
(purpose, professionals in place), then realism (budget and contact data).
"""

from typing import Optional

from .config import QualityWeights
from .models import LeadRecord
from .results import Breakdown, QualityScore, ScoreFactor, clamp
from .signals import PurchasePurpose, classify_purpose

_IN_PROGRESS_MORTGAGE = {"in progress", "applied", "applying", "submitted"}


def _format_money(amount: float) -> str:
    if amount >= 1_000_000:
        return f"£{amount / 1_000_000:g}M"
    if amount >= 1_000:
        return f"£{amount / 1_000:g}k"
    return f"£{amount:g}"


def disqualification_reason(lead: LeadRecord, weights: QualityWeights) -> Optional[str]:
    """Return why the lead is disqualified outright, or None."""
    budget = lead.budget_value
    if 0 < budget < weights.min_viable_budget:
        return (
            f"Budget {_format_money(budget)} is below the minimum viable purchase price "
            f"({_format_money(weights.min_viable_budget)})"
        )
    if (
        budget >= weights.mismatch_budget
        and lead.bedrooms is not None
        and lead.bedrooms <= weights.mismatch_max_bedrooms
    ):
        return f"{_format_money(weights.mismatch_budget)}+ budget with studio/1-bed preference is unrealistic"
    return None


def calculate_quality_score(lead: LeadRecord, weights: Optional[QualityWeights] = None) -> QualityScore:
    """Score a lead's ability to transact, 0-100."""
    weights = weights or QualityWeights()

    reason = disqualification_reason(lead, weights)
    if reason:
        return QualityScore(
            total=0,
            breakdown=(ScoreFactor("Auto-Disqualification", -100, reason),),
            is_disqualified=True,
            disqualification_reason=reason,
        )

    b = Breakdown()
    total = b.add("Baseline", weights.baseline, "Starting score")

    # === FINANCIAL PROCEEDABILITY ===
    if lead.is_cash_buyer:
        total += b.add("Cash Buyer", weights.cash_buyer, "Cash buyer - highest financial proceedability")
    elif lead.is_mortgage_buyer:
        if lead.has_broker:
            total += b.add(
                "Mortgage + Has Broker",
                weights.mortgage_has_broker,
                "Mortgage buyer with broker already connected - ready to proceed",
            )
        elif lead.wants_broker:
            total += b.add(
                "Mortgage + Wants Broker",
                weights.mortgage_wants_broker,
                "Mortgage buyer who needs a broker connection",
            )
        else:
            total += b.add("Mortgage Buyer", weights.mortgage_unknown_broker, "Mortgage buyer - broker status unknown")

    mortgage_status = (lead.mortgage_status or "").strip().lower()
    if lead.mortgage_approved:
        total += b.add("Mortgage Approved", weights.mortgage_approved, "Mortgage approved / agreement in principle")
    elif mortgage_status in _IN_PROGRESS_MORTGAGE:
        total += b.add("Mortgage In Progress", weights.mortgage_in_progress, "Mortgage application in progress")

    if lead.proof_of_funds:
        total += b.add("Proof of Funds", weights.proof_of_funds, "Proof of funds received")

    # === COMMITMENT SIGNALS ===
    if lead.has_solicitor:
        total += b.add("Solicitor Appointed", weights.solicitor_appointed, "UK solicitor in place")

    if lead.is_mortgage_buyer and not lead.has_broker and not lead.has_solicitor:
        total += b.add(
            "No Professional Connections",
            weights.no_professional_connections,
            "Financing without a broker or solicitor",
        )

    purpose = classify_purpose(lead.purpose)
    if purpose == PurchasePurpose.PRIMARY_RESIDENCE:
        total += b.add("Primary Residence", weights.primary_residence, "Buying as primary residence - high commitment")
    elif purpose == PurchasePurpose.DEPENDENT_STUDYING:
        total += b.add("Dependent Studying", weights.dependent_studying, "Buying for a dependent studying")
    elif purpose == PurchasePurpose.INVESTMENT:
        total += b.add("Investment", weights.investment, "Investment purchase")
    elif purpose == PurchasePurpose.HOLIDAY_HOME:
        total += b.add("Holiday/Second Home", weights.holiday_home, "Holiday or second home purchase")

    # === REALISM ===
    budget = lead.budget_value
    if budget > 0:
        total += b.add("Budget Specified", weights.budget_specified, "Budget provided")
        if budget >= weights.premium_budget:
            total += b.add(
                "Premium Budget",
                weights.premium_budget_bonus,
                f"Budget of {_format_money(weights.premium_budget)}+",
            )
        elif budget >= weights.good_budget:
            total += b.add("Good Budget", weights.good_budget_bonus, f"Budget of {_format_money(weights.good_budget)}+")
    elif lead.has_budget:
        total += b.add("Budget Unclear", weights.budget_unparseable, "Budget given but could not be read")
    else:
        total += b.add("Budget Missing", weights.budget_missing, "No budget provided")

    contact = [label for label, value in (("name", lead.has_name), ("email", lead.email), ("phone", lead.phone)) if value]
    if lead.has_name and len(contact) >= 2:
        total += b.add("Complete Contact Info", weights.complete_contact, f"Contact provided: {', '.join(contact)}")
    else:
        b.add("Incomplete Contact Info", 0, f"Missing contact information (has: {', '.join(contact) or 'none'})")

    return QualityScore(total=int(clamp(total, 0, 100)), breakdown=b.freeze())
