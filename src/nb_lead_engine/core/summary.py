"""Rule-based narrative summary, next action and recommendations for a scored lead."""

from typing import TYPE_CHECKING, List, Optional

from .classifier import Classification
from .config import RiskFlagRules
from .models import LeadRecord
from .risk import is_international

if TYPE_CHECKING:
    from .scorer import ScoringResult

MAX_RECOMMENDATIONS = 5

_DESCRIPTIONS = {
    Classification.HOT: "high-priority",
    Classification.WARM_QUALIFIED: "financially qualified",
    Classification.WARM_ENGAGED: "actively engaged",
    Classification.NURTURE: "developing",
    Classification.COLD: "early-stage",
    Classification.DISQUALIFIED: "unqualified",
    Classification.SPAM: "suspected spam",
}


def _article(word: str) -> str:
    return "an" if word[:1].lower() in "aeiou" else "a"


def _financial_status(lead: LeadRecord) -> str:
    if lead.is_cash_buyer:
        return "verified cash buyer" if lead.proof_of_funds else "cash buyer (unverified)"
    if lead.is_mortgage_buyer:
        return "mortgage buyer with AIP" if lead.mortgage_approved else "mortgage buyer (pending approval)"
    return f"{lead.payment_method or 'unknown payment method'} buyer"


def generate_summary(
    lead: LeadRecord, result: "ScoringResult", rules: Optional[RiskFlagRules] = None
) -> str:
    """Three-sentence summary of who the buyer is and where they stand."""
    classification = result.classification
    name = lead.name or "This lead"
    location = lead.location or "unspecified location"

    if is_international(lead, rules):
        where = f"based in {lead.country}, interested in {location}"
    else:
        where = f"looking in {location}"

    description = _DESCRIPTIONS[classification]
    first = f"{name} is {_article(description)} {description} {_financial_status(lead)} {where}."
    budget = lead.budget or lead.budget_range or "unspecified budget"
    second = f"Budget: {budget}. Timeline: {lead.timeline or 'unspecified timeline'}."

    if classification in (Classification.HOT, Classification.WARM_QUALIFIED):
        info = result.priority
        third = (
            f'Currently at "{lead.status or "Contact Pending"}" stage. '
            f"Priority: {info.priority.value} ({info.response_time} response time)."
        )
    elif result.risk_flags:
        third = f"Note: {result.risk_flags[0]}."
    elif result.confidence_score.total < 5:
        third = f"Limited data available - confidence: {result.confidence_score.total}/10."
    else:
        third = f"Quality: {result.quality_score.total}/100, Intent: {result.intent_score.total}/100."

    return f"{first} {second} {third}"


def determine_next_action(lead: LeadRecord, result: "ScoringResult") -> str:
    """The single most useful thing an agent should do next."""
    classification = result.classification
    status = lead.status_text

    if classification == Classification.SPAM:
        return "Review and verify lead authenticity before proceeding"
    if classification == Classification.DISQUALIFIED:
        return "Archive lead - does not meet minimum qualification criteria"

    if classification == Classification.HOT:
        if not lead.phone and not lead.email:
            return "Obtain contact details through original source"
        if "viewing booked" in status:
            return "Confirm viewing and prepare property presentation"
        if "negotiating" in status:
            return "Follow up on offer status and address objections"
        if not lead.proof_of_funds:
            return "Request proof of funds to progress to viewing stage"
        return "Call within 1 hour to book viewing"

    if classification == Classification.WARM_QUALIFIED:
        if lead.is_cash_buyer and not lead.proof_of_funds:
            return "Request proof of funds to confirm cash buyer status"
        if lead.is_mortgage_buyer and not lead.mortgage_approved:
            return "Recommend mortgage broker and request AIP within 5 days"
        if not lead.has_solicitor:
            return "Introduce to panel solicitor to prepare for exchange"
        return "Schedule discovery call to confirm timeline and preferences"

    if classification == Classification.WARM_ENGAGED:
        if not lead.timeline:
            return "Clarify purchase timeline and urgency"
        if lead.bedrooms is None:
            return "Qualify property requirements - bedrooms, location, features"
        return "Send personalized property recommendations to maintain engagement"

    if classification == Classification.NURTURE:
        if result.quality_score.total > result.intent_score.total:
            return "Re-engage with market update and new property listings"
        return "Add to nurture sequence with educational content about buying process"

    return "Low priority - add to long-term nurture campaign"


def generate_recommendations(
    lead: LeadRecord, result: "ScoringResult", rules: Optional[RiskFlagRules] = None
) -> List[str]:
    """Concrete follow-ups, at most five."""
    if result.classification in (Classification.SPAM, Classification.DISQUALIFIED):
        return ["Review lead data for accuracy", "Consider removing from active pipeline"]

    quality = result.quality_score.total
    intent = result.intent_score.total
    recs: List[str] = []

    if not lead.proof_of_funds:
        recs.append("Request proof of funds or bank statement")

    if lead.is_mortgage_buyer:
        if not lead.mortgage_approved:
            recs.append("Connect with mortgage advisor for AIP")
        if not lead.has_broker:
            recs.append("Introduce to partner mortgage broker")

    if not lead.has_solicitor and quality >= 50:
        recs.append("Recommend panel solicitor early in process")

    if lead.location and lead.bedrooms is not None:
        beds = "studio" if lead.bedrooms == 0 else f"{lead.bedrooms}-bed"
        recs.append(f"Prepare {beds} options in {lead.location}")
    elif lead.location:
        recs.append(f"Curate properties in {lead.location} matching budget")

    if is_international(lead, rules):
        recs.append("Discuss currency exchange and international payment options")
        recs.append("Clarify UK purchase process for overseas buyers")

    if lead.budget_value >= 1_000_000:
        recs.append("Offer exclusive/off-market property access")

    if intent < 50 and quality >= 60:
        recs.append("Schedule discovery call to understand timeline")
    if quality < 50 and intent >= 60:
        recs.append("Complete buyer profile with missing information")

    if "viewing booked" in lead.status_text:
        recs.append("Send viewing confirmation with development details")
        recs.append("Prepare comparable market analysis")

    if not lead.timeline:
        recs.append("Clarify purchase timeline in next conversation")

    return recs[:MAX_RECOMMENDATIONS]
