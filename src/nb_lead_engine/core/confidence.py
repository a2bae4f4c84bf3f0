"""Confidence score - how far the lead's data can be trusted, 0-10."""

from typing import Optional

from .config import ConfidenceWeights
from .models import LeadRecord, parse_budget, phone_digits
from .results import Breakdown, ConfidenceScore, clamp, round_half_up
from .signals import PLACEHOLDER_NOTES, is_disposable_email, is_placeholder_name, is_valid_email


def _qualification_fields(lead: LeadRecord):
    return (
        ("budget", lead.has_budget),
        ("payment method", lead.payment_method),
        ("timeline", lead.timeline),
        ("location", lead.location),
        ("bedrooms", lead.bedrooms is not None),
        ("source", lead.source),
        ("purpose", lead.purpose),
    )


def _budget_range_inverted(lead: LeadRecord) -> bool:
    low = parse_budget(lead.budget_min)
    high = parse_budget(lead.budget_max)
    return low > 0 and high > 0 and low > high


def calculate_confidence_score(
    lead: LeadRecord, weights: Optional[ConfidenceWeights] = None
) -> ConfidenceScore:
    """Score the completeness and consistency of a lead's data."""
    weights = weights or ConfidenceWeights()
    b = Breakdown()
    total = b.add("Baseline", weights.baseline, "Starting confidence")

    # Name
    name = lead.name
    if not name:
        total += b.add("Name Missing", weights.name_missing, "No name provided")
    elif is_placeholder_name(name):
        total += b.add("Placeholder Name", weights.placeholder_name, f"Name looks like a placeholder: {name}")
    else:
        total += b.add("Name Provided", weights.name_present, "Name provided")

    # Email
    if lead.email:
        if is_disposable_email(lead.email):
            total += b.add("Disposable Email", weights.email_disposable, "Email looks disposable or fake")
        elif is_valid_email(lead.email):
            total += b.add("Valid Email", weights.email_valid, "Email is well-formed")
        else:
            total += b.add("Malformed Email", weights.email_malformed, "Email is not well-formed")

    # Phone
    if lead.phone:
        digits = phone_digits(lead.phone)
        if 10 <= len(digits) <= 15:
            total += b.add("Valid Phone", weights.phone_valid, "Phone number is well-formed")
        else:
            total += b.add("Malformed Phone", weights.phone_malformed, f"Phone has {len(digits)} digits")

    if not lead.email and not lead.phone:
        total += b.add("No Contact Details", weights.no_contact, "Neither email nor phone provided")

    populated = [label for label, value in _qualification_fields(lead) if value]
    if populated:
        total += b.add(
            "Qualification Fields",
            weights.field_populated * len(populated),
            f"Provided: {', '.join(populated)}",
        )

    notes = (lead.notes or "").strip()
    if notes and notes.lower() not in PLACEHOLDER_NOTES:
        if len(notes) > weights.detailed_notes_length:
            total += b.add("Detailed Notes", weights.detailed_notes, "Detailed notes provided")
        elif len(notes) > weights.basic_notes_length:
            total += b.add("Basic Notes", weights.basic_notes, "Notes provided")

    if lead.proof_of_funds:
        total += b.add("Proof of Funds", weights.proof_of_funds, "Proof of funds supports the stated budget")

    if _budget_range_inverted(lead):
        total += b.add("Inverted Budget Range", weights.inverted_budget_range, "Minimum budget exceeds maximum")

    return ConfidenceScore(total=round_half_up(clamp(total, 0.0, 10.0), 1), breakdown=b.freeze())
